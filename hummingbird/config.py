"""
Environment configuration for the Hummingbird client.

Values are read from the process environment after loading a `.env` file
if present.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import requests
from dotenv import load_dotenv

from .client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HummingbirdClient


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    username: str = ""
    email: str = ""
    password: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from HUMMINGBIRD_* variables.

        Raises:
            ValueError: HUMMINGBIRD_TIMEOUT is not a number.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        raw_timeout = environ.get("HUMMINGBIRD_TIMEOUT") or str(DEFAULT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ValueError(f"HUMMINGBIRD_TIMEOUT must be a number, got {raw_timeout!r}") from exc
        return cls(
            base_url=environ.get("HUMMINGBIRD_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout,
            username=environ.get("HUMMINGBIRD_USERNAME", ""),
            email=environ.get("HUMMINGBIRD_EMAIL", ""),
            password=environ.get("HUMMINGBIRD_PASSWORD", ""),
        )

    @property
    def has_credentials(self) -> bool:
        return bool((self.username or self.email) and self.password)

    def client(self, session: Optional[requests.Session] = None) -> HummingbirdClient:
        client = HummingbirdClient(base_url=self.base_url, session=session, timeout=self.timeout)
        if self.has_credentials:
            client.user.set_credentials(self.username, self.email, self.password)
        return client
