"""Account credentials for the Ring API."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Ring account username/password.

    The Base64 form used by ``POST session`` is derived on every access
    and never stored.
    """

    username: str
    password: str = field(repr=False)

    @property
    def encoded(self) -> str:
        """Base64 of ``"username:password"`` (UTF-8)."""
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    @property
    def authorization_header(self) -> str:
        return f"Basic {self.encoded}"
