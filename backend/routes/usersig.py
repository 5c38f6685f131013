"""UserSig and stream address REST API."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from services.settings import TRTCSettings
from services.stream_address import fetch_stream_addresses
from services.usersig import UserSigError, generate_user_sig

router = APIRouter(tags=["usersig"])
logger = logging.getLogger(__name__)


class UserSigResponse(BaseModel):
    user_id: str
    sdk_app_id: int
    user_sig: str
    expire: int


class StreamAddressResponse(BaseModel):
    push_url: str
    play_url: str


def get_settings() -> TRTCSettings:
    try:
        return TRTCSettings.from_env()
    except ValueError as exc:
        logger.error("[usersig] Invalid TRTC configuration: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@router.get("/usersig", response_model=UserSigResponse, status_code=200)
def get_usersig(
    user_id: str = Query(..., description="Identifier the UserSig is issued for"),
    settings: TRTCSettings = Depends(get_settings),
) -> UserSigResponse:
    """Sign a UserSig for user_id with the configured SDKAppID and secret key."""
    logger.info("[usersig] GET /api/usersig called. user_id=%s", user_id)
    if not settings.is_configured:
        raise HTTPException(
            status_code=503,
            detail="TRTC credentials not configured (TRTC_SDK_APP_ID / TRTC_SECRET_KEY)",
        )
    try:
        user_sig = generate_user_sig(
            user_id,
            settings.sdk_app_id,
            settings.secret_key,
            settings.expire_seconds,
        )
    except UserSigError as exc:
        logger.error("[usersig] UserSig generation failed for user_id=%s: %s", user_id, exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return UserSigResponse(
        user_id=user_id,
        sdk_app_id=settings.sdk_app_id,
        user_sig=user_sig,
        expire=settings.expire_seconds,
    )


@router.get("/stream-address", response_model=StreamAddressResponse, status_code=200)
async def get_stream_address(
    settings: TRTCSettings = Depends(get_settings),
) -> StreamAddressResponse:
    """Proxy the push/play address lookup so clients don't need the backend URL."""
    if not settings.stream_address_url:
        raise HTTPException(
            status_code=503,
            detail="Stream address service not configured (TRTC_STREAM_ADDRESS_URL)",
        )
    addresses = await fetch_stream_addresses(
        settings.stream_address_url, timeout=settings.request_timeout
    )
    if addresses is None:
        raise HTTPException(status_code=502, detail="Stream address lookup failed")
    return StreamAddressResponse(push_url=addresses.push_url, play_url=addresses.play_url)
