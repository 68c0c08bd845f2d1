from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_range_provider
from app.exceptions import ValidationError
from app.models.check import (
    BatchCheckRequest,
    BatchCheckResponse,
    CheckPasswordRequest,
    CheckResult,
)
from app.services import batch as batch_service
from app.services import breach_check as breach_service
from app.services.range_provider import RangeProvider

router = APIRouter()


@router.post("/check-password", response_model=CheckResult)
async def check_password(
    body: CheckPasswordRequest,
    provider: RangeProvider = Depends(get_range_provider),
):
    """Check one password against the breach corpus.

    Only the first 5 characters of the password's SHA-1 digest leave the server.
    """
    try:
        return await breach_service.check_password(body.password, provider)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/check-passwords-batch", response_model=BatchCheckResponse)
async def check_passwords_batch(
    body: BatchCheckRequest,
    provider: RangeProvider = Depends(get_range_provider),
):
    """Check up to 10 passwords sequentially, one result per input in order."""
    try:
        results = await batch_service.check_passwords_batch(body.passwords, provider)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return BatchCheckResponse(results=results)
