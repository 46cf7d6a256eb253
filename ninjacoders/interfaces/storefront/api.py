"""
FastAPI router for the storefront JSON API.

Every endpoint answers with the result envelope:
``{"result": "success"}`` or ``{"result": "error", "error": <message>}``.
Errors are turned into envelopes by the centralized error handlers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Path, Request, UploadFile
from pydantic import ValidationError as SchemaValidationError
from starlette.concurrency import run_in_threadpool

from ninjacoders.application.storefront.dtos import (
    NewsletterSignupCommand,
    StoreContestPhotoCommand,
)
from ninjacoders.application.storefront.newsletter_signup import (
    NewsletterSignupUseCase,
)
from ninjacoders.application.storefront.store_contest_photo import (
    StoreContestPhotoUseCase,
)
from ninjacoders.core.config import settings
from ninjacoders.domain.storefront.errors import ValidationError
from ninjacoders.interfaces.storefront.dependencies import (
    get_newsletter_signup_use_case,
    get_store_contest_photo_use_case,
)
from ninjacoders.interfaces.storefront.schemas import ApiResult, NewsletterSignupRequest
from ninjacoders.interfaces.storefront.session import set_flash
from ninjacoders.interfaces.storefront.uploads import spool_upload
from ninjacoders.shared.security.rate_limiting import (
    DEFAULT_RATE_LIMIT,
    HEAVY_RATE_LIMIT,
    limiter,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

SUCCESS = ApiResult(result="success")


async def _read_signup(request: Request) -> NewsletterSignupRequest:
    """Accept the signup as JSON (ajax form) or as a urlencoded/multipart form."""
    if request.headers.get("content-type", "").lower().startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError as exc:
            raise ValidationError("Invalid request.") from exc
    else:
        payload = dict(await request.form())
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request.")
    try:
        return NewsletterSignupRequest.model_validate(payload)
    except SchemaValidationError as exc:
        raise ValidationError("Invalid request.") from exc


@router.post(
    "/newsletter-signup",
    response_model=ApiResult,
    response_model_exclude_none=True,
    summary="Sign up for the newsletter",
    description="Validates the address and sends the welcome email.",
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def newsletter_signup(
    request: Request,
    use_case: NewsletterSignupUseCase = Depends(get_newsletter_signup_use_case),
) -> ApiResult:
    """Sign a visitor up and leave a thank-you notice for the next page."""
    body = await _read_signup(request)
    await run_in_threadpool(
        use_case.execute, NewsletterSignupCommand(name=body.name, email=body.email)
    )
    set_flash(
        request,
        "success",
        "Thank you!",
        "You have now been signed up for the newsletter.",
    )
    return SUCCESS


@router.post(
    "/setup-photo-contest/{year}/{month}",
    response_model=ApiResult,
    response_model_exclude_none=True,
    summary="Upload a contest photo",
    description="Stores the multipart field `photo` under contest-uploads/{year}/{month}.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
def setup_photo_contest(
    request: Request,
    year: int = Path(..., ge=1970, le=9999),
    month: int = Path(..., ge=1, le=12),
    photo: Optional[UploadFile] = File(None),
    use_case: StoreContestPhotoUseCase = Depends(get_store_contest_photo_use_case),
) -> ApiResult:
    """Store one contest photo in its year/month partition."""
    if photo is None or not photo.filename:
        raise ValidationError("No photo uploaded.")

    temp_path = spool_upload(photo, settings.upload_tmp_dir)
    try:
        use_case.execute(
            StoreContestPhotoCommand(
                year=year,
                month=month,
                temp_path=temp_path,
                original_filename=photo.filename,
            )
        )
    except ValidationError:
        temp_path.unlink(missing_ok=True)
        raise
    return SUCCESS
