"""Generate TRTC UserSig credentials (HMAC-SHA256 signed, zlib-compressed, base64url-ish)."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import math
import time
import zlib

from models.usersig import SignaturePayload

logger = logging.getLogger(__name__)

DEFAULT_EXPIRE_SECONDS = 7 * 24 * 3600  # 604800, one week

# The RTC service's variant of base64url: every base64 symbol outside
# [A-Za-z0-9] is swapped, padding included.
_TO_USERSIG_ALPHABET = str.maketrans({"+": "*", "/": "-", "=": "_"})
_FROM_USERSIG_ALPHABET = str.maketrans({"*": "+", "-": "/", "_": "="})


class UserSigError(Exception):
    """Base class for failures while producing a UserSig."""


class CompressionError(UserSigError):
    """The compression backend rejected the signed document."""


class EncodingError(UserSigError):
    """A key or identifier could not be encoded for signing."""


def base64url_encode(data: bytes) -> str:
    """Standard base64, then ``+ / =`` become ``* - _``."""
    return base64.b64encode(data).decode("ascii").translate(_TO_USERSIG_ALPHABET)


def base64url_decode(text: str) -> bytes:
    return base64.b64decode(text.translate(_FROM_USERSIG_ALPHABET).encode("ascii"))


def _to_bytes(value: str | bytes, what: str, *, strict_ascii: bool) -> bytes:
    if isinstance(value, bytes):
        if strict_ascii and not value.isascii():
            raise EncodingError(f"{what} is not ASCII")
        return value
    encoding = "ascii" if strict_ascii else "utf-8"
    try:
        return value.encode(encoding)
    except UnicodeEncodeError as exc:
        raise EncodingError(f"{what} cannot be encoded as {encoding}: {exc}") from exc


def _require_int(value: object, what: str) -> None:
    # bool is an int subclass but would render as "True" in the signed string
    if not isinstance(value, int) or isinstance(value, bool):
        raise UserSigError(f"{what} must be an int, got {type(value).__name__}")


def sign_string(string_to_sign: str, secret_key: str | bytes, *, strict_ascii: bool = False) -> str:
    """
    HMAC-SHA256 ``string_to_sign`` with ``secret_key`` and return the digest in
    standard base64 (``+``, ``/`` and ``=`` kept).

    With ``strict_ascii`` both inputs must be ASCII, matching the legacy client
    SDK helpers; otherwise UTF-8 is used.
    """
    key = _to_bytes(secret_key, "secret key", strict_ascii=strict_ascii)
    message = _to_bytes(string_to_sign, "string to sign", strict_ascii=strict_ascii)
    digest = hmac.new(key, message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def serialize_payload(payload: SignaturePayload) -> bytes:
    """Sorted-key compact JSON of the payload document, UTF-8 encoded."""
    return json.dumps(
        payload.to_document(),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def compress_document(raw: bytes) -> bytes:
    try:
        return zlib.compress(raw, zlib.Z_BEST_SPEED)
    except zlib.error as exc:
        logger.error("[usersig] Compression failed for %d byte document: %s", len(raw), exc)
        raise CompressionError(str(exc)) from exc


def generate_user_sig(
    identifier: str,
    sdk_app_id: int,
    secret_key: str | bytes,
    expire_seconds: int = DEFAULT_EXPIRE_SECONDS,
    now: float | None = None,
    *,
    strict_ascii: bool = False,
) -> str:
    """
    Build a UserSig for ``identifier`` under application ``sdk_app_id``.

    :param identifier: User the credential is issued for. Empty strings are accepted.
    :param sdk_app_id: Application ID from the RTC console
    :param secret_key: Shared secret the RTC service verifies with
    :param expire_seconds: Validity window; not range-checked
    :param now: Epoch seconds to stamp as issue time (floored); defaults to time.time()
    :param strict_ascii: Reject non-ASCII key/identifier instead of signing UTF-8
    :return: Token string, ASCII only
    :raises UserSigError: sdk_app_id or expire_seconds is not an int
    :raises EncodingError: strict_ascii is set and an input is not ASCII
    :raises CompressionError: zlib could not compress the signed document
    """
    _require_int(sdk_app_id, "sdk_app_id")
    _require_int(expire_seconds, "expire_seconds")
    issued_at = math.floor(time.time() if now is None else now)
    payload = SignaturePayload(
        identifier=identifier,
        sdk_app_id=sdk_app_id,
        expire=expire_seconds,
        issued_at=issued_at,
    )
    payload.signature = sign_string(payload.string_to_sign(), secret_key, strict_ascii=strict_ascii)
    logger.debug(
        "[usersig] Signed identifier=%r sdkappid=%s time=%s expire=%s",
        payload.identifier,
        payload.sdk_app_id,
        payload.issued_at,
        payload.expire,
    )
    return base64url_encode(compress_document(serialize_payload(payload)))
