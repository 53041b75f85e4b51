"""Tests for the `limbo status` command."""

import httpx
import pytest

from limbo.cli.commands.status import get_server_url, status


def _fake_get(payload: dict | None = None, status_code: int = 200, error: Exception | None = None):
    calls: list[str] = []

    def fake_get(url: str, **kwargs):
        calls.append(url)
        if error is not None:
            raise error
        return httpx.Response(status_code, json=payload, request=httpx.Request("GET", url))

    return fake_get, calls


class TestServerUrl:
    def test_wildcard_host_maps_to_localhost(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LIMBO_HTTP__HOST", "0.0.0.0")
        monkeypatch.setenv("LIMBO_HTTP__PORT", "3100")

        assert get_server_url() == "http://localhost:3100"


class TestStatusCommand:
    def test_registered_artist(self, monkeypatch: pytest.MonkeyPatch, capsys):
        fake_get, calls = _fake_get(
            {
                "found": True,
                "name": "Anna Petrova",
                "registered": True,
                "recipientId": "555",
                "registeredAt": "2024-03-01T12:00:00Z",
            }
        )
        monkeypatch.setattr(httpx, "get", fake_get)

        status("anna", server="http://limbo.test")

        assert calls == ["http://limbo.test/api/artist/anna/status"]
        out = capsys.readouterr().out
        assert "Anna Petrova" in out
        assert "555" in out

    def test_unknown_artist_exits(self, monkeypatch: pytest.MonkeyPatch):
        fake_get, _ = _fake_get({"found": False, "message": "Artist not found"})
        monkeypatch.setattr(httpx, "get", fake_get)

        with pytest.raises(SystemExit) as exc_info:
            status("nobody", server="http://limbo.test")

        assert exc_info.value.code == 1

    def test_server_down_exits(self, monkeypatch: pytest.MonkeyPatch, capsys):
        fake_get, _ = _fake_get(error=httpx.ConnectError("connection refused"))
        monkeypatch.setattr(httpx, "get", fake_get)

        with pytest.raises(SystemExit):
            status("anna", server="http://limbo.test")

        assert "Could not connect" in capsys.readouterr().err

    def test_server_error_exits(self, monkeypatch: pytest.MonkeyPatch):
        fake_get, _ = _fake_get({"success": False}, status_code=503)
        monkeypatch.setattr(httpx, "get", fake_get)

        with pytest.raises(SystemExit):
            status("anna", server="http://limbo.test")
