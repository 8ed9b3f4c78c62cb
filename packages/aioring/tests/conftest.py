"""Shared fixtures — recorded Ring API payloads."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def auth_response() -> str:
    return (FIXTURES / "authenticate_response.json").read_text()


@pytest.fixture
def devices_response() -> str:
    return (FIXTURES / "devices_response.json").read_text()


@pytest.fixture
def history_response() -> str:
    return (FIXTURES / "doorbot_history_response.json").read_text()
