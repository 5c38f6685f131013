from dataclasses import dataclass

USERSIG_VERSION = "2.0"

# Order of the signed lines; changing it changes every signature.
SIGNED_FIELD_ORDER = (
    "TLS.identifier",
    "TLS.sdkappid",
    "TLS.time",
    "TLS.expire",
)


@dataclass
class SignaturePayload:
    identifier: str            # subject the token is issued for
    sdk_app_id: int
    expire: int                # validity in seconds, passed through as-is
    issued_at: int             # unix seconds, floored
    version: str = USERSIG_VERSION
    signature: str | None = None   # base64 HMAC, set after signing

    def to_document(self) -> dict[str, str | int]:
        """Map fields onto the TLS.* keys the RTC login service expects."""
        document: dict[str, str | int] = {
            "TLS.ver": self.version,
            "TLS.identifier": self.identifier,
            "TLS.sdkappid": self.sdk_app_id,
            "TLS.expire": self.expire,
            "TLS.time": self.issued_at,
        }
        if self.signature is not None:
            document["TLS.sig"] = self.signature
        return document

    def string_to_sign(self) -> str:
        document = self.to_document()
        return "".join(f"{key}:{document[key]}\n" for key in SIGNED_FIELD_ORDER)


@dataclass
class StreamAddresses:
    push_url: str              # url_push
    play_url: str              # url_play_flv
