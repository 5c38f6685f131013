from .settings import TRTCSettings
from .usersig import (
    CompressionError,
    EncodingError,
    UserSigError,
    base64url_decode,
    base64url_encode,
    generate_user_sig,
)

__all__ = [
    "TRTCSettings",
    "generate_user_sig",
    "base64url_encode",
    "base64url_decode",
    "UserSigError",
    "CompressionError",
    "EncodingError",
]
