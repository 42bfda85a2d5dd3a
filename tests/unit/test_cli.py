from __future__ import annotations

import json
from pathlib import Path

import pytest

from temporal_apig import main as cli
from temporal_apig.interaction import decode

SIGNAL_JSON = json.dumps(
    {
        "type": "Signal",
        "namespace": "ns",
        "task_queue": "tq",
        "workflow_id": "wf",
        "signal_name": "go",
    }
)


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


def test_encode_prints_callback_id(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["encode", "--json", SIGNAL_JSON]) == 0

    out = capsys.readouterr().out.strip()
    assert out == "A~E:Signal,W:wf,N:ns,T:tq,S:go"


def test_decode_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["decode", "A~E:Signal,W:wf,N:ns,T:tq,S:go~user data"]) == 0

    decoded = json.loads(capsys.readouterr().out)
    assert decoded["type"] == "Signal"
    assert decoded["signal_name"] == "go"
    assert decoded["input"] is None


def test_encode_then_decode(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["encode", "--json", SIGNAL_JSON, "--encoder-version", "A"])
    encoded = capsys.readouterr().out.strip()

    assert decode(encoded).workflow_id == "wf"


def test_decode_error_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["decode", "B~E:Signal"]) == 2
    assert "B" in capsys.readouterr().err


def test_invalid_json_exit_code() -> None:
    assert cli.main(["encode", "--json", '{"type": "Signal"}']) == 2


def test_strict_encode_rejects_delimiters(capsys: pytest.CaptureFixture[str]) -> None:
    unsafe = json.loads(SIGNAL_JSON) | {"signal_name": "a,b"}

    assert cli.main(["encode", "--json", json.dumps(unsafe), "--strict"]) == 2
    assert "signal_name" in capsys.readouterr().err


def test_configuration_error_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")

    assert cli.main(["decode", "A~E:Signal,N:ns,T:tq,S:go"]) == 2


def test_serve_uses_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    monkeypatch.setenv("APIG_PORT", "9001")

    assert cli.main(["serve", "--host", "127.0.0.1"]) == 0

    assert calls == [{"host": "127.0.0.1", "port": 9001, "log_config": None}]
