from .usersig import SIGNED_FIELD_ORDER, USERSIG_VERSION, SignaturePayload, StreamAddresses

__all__ = [
    "SignaturePayload",
    "StreamAddresses",
    "SIGNED_FIELD_ORDER",
    "USERSIG_VERSION",
]
