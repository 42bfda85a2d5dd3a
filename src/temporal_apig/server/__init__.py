"""FastAPI server adapter for temporal-apig.

Design intent:
- Keep codec and dispatch logic in `temporal_apig.interaction`, `temporal_apig.slack`
  and `temporal_apig.engine`
- Keep server-specific concerns (routing, API versions, auth, status codes) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from temporal_apig.server.app import create_app
