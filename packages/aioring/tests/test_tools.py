"""Tests for the developer scripts under tools/."""

from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path
from types import ModuleType
from unittest.mock import AsyncMock, MagicMock

import pytest

from aioring.models import Devices, Profile, Session

TOOLS = Path(__file__).resolve().parents[3] / "tools"


def _load_tool(name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(
        name.replace("-", "_"), TOOLS / f"{name}.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestRingLogin:
    async def test_session_file_holds_no_token(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        tool = _load_tool("ring-login")
        session_file = tmp_path / ".ring-session"

        client = MagicMock()
        client.is_authenticated = True
        client.async_authenticate = AsyncMock(
            return_value=Session(
                profile=Profile(
                    id=4208521,
                    email="someone@example.com",
                    authentication_token="xQzLk2pN8vRtYw3mB7cD",
                )
            )
        )
        client.async_get_ring_devices = AsyncMock(return_value=Devices())

        monkeypatch.setattr(tool, "SESSION_FILE", session_file)
        monkeypatch.setattr(tool, "RingClient", MagicMock(return_value=client))
        monkeypatch.setattr(
            sys,
            "argv",
            ["ring-login.py", "--username", "someone@example.com", "--password", "pw"],
        )

        assert await tool.async_main() == 0

        text = session_file.read_text()
        assert json.loads(text) == {
            "username": "someone@example.com",
            "account_id": 4208521,
        }
        assert "xQzLk2pN8vRtYw3mB7cD" not in text
