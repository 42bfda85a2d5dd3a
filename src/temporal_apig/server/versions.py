"""API version resolution from the ``/api/{version}`` path segment."""

from __future__ import annotations

from enum import Enum

UNSUPPORTED_API_VERSION_MSG = "unsupported API version, route is invalid"


class ApiVersion(str, Enum):
    V1 = "v1"


class UnsupportedApiVersionError(LookupError):
    def __init__(self, version: str) -> None:
        super().__init__(f"{UNSUPPORTED_API_VERSION_MSG}: {version!r}")
        self.version = version


def resolve_api_version(version: str) -> ApiVersion:
    """FastAPI dependency: read the ``version`` path parameter."""

    try:
        return ApiVersion(version)
    except ValueError:
        raise UnsupportedApiVersionError(version) from None
