"""TRTC credentials and endpoints, read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from services.usersig import DEFAULT_EXPIRE_SECONDS

DEFAULT_REQUEST_TIMEOUT = 30.0


def _read(environ: Mapping[str, str], name: str) -> str:
    return environ.get(name, "").strip()


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _read(environ, name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _read(environ, name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class TRTCSettings:
    sdk_app_id: int = 0
    secret_key: str = ""
    expire_seconds: int = DEFAULT_EXPIRE_SECONDS
    stream_address_url: str = ""   # backend returning url_push / url_play_flv
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return self.sdk_app_id > 0 and bool(self.secret_key)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TRTCSettings:
        """
        Build settings from TRTC_* variables. Blank values fall back to defaults;
        malformed numbers raise ValueError naming the variable.
        """
        environ = os.environ if environ is None else environ
        return cls(
            sdk_app_id=_read_int(environ, "TRTC_SDK_APP_ID", 0),
            secret_key=_read(environ, "TRTC_SECRET_KEY"),
            expire_seconds=_read_int(environ, "TRTC_EXPIRE_SECONDS", DEFAULT_EXPIRE_SECONDS),
            stream_address_url=_read(environ, "TRTC_STREAM_ADDRESS_URL"),
            request_timeout=_read_float(environ, "TRTC_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        )
