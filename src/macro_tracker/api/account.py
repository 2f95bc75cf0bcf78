"""Account and meal-photo analysis endpoints."""

import base64
import binascii
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from macro_tracker.api.auth import get_container, require_user
from macro_tracker.api.models import AnalyzeOut, AnalyzeRequest

router = APIRouter(prefix="/api", tags=["account"])


@router.post("/analyze")
async def analyze(
    body: AnalyzeRequest, request: Request, _user_id: UUID = Depends(require_user)
) -> AnalyzeOut:
    """Estimate the macros of a meal photo."""
    image_bytes = _decode_image(body.image_base64)
    estimate = await get_container(request).vision_service.estimate(image_bytes)
    return AnalyzeOut.from_estimate(estimate)


@router.delete("/account")
async def delete_account(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, bool]:
    """Delete the account with all entries, goals and settings."""
    get_container(request).user_service.delete_account(user_id)
    return {"success": True}


def _decode_image(raw: str) -> bytes:
    """Decode base64 image data, accepting a data URL prefix."""
    _, _, encoded = raw.rpartition(",")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Image must be base64 encoded",
        ) from exc
