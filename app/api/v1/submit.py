"""
Internship application intake.

Public endpoint that receives the application form, stores the optional
attachment, records the submission and emails a confirmation.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.datastructures import FormData, Headers, UploadFile
from starlette.formparsers import FormParser, MultiPartException, MultiPartParser

from app.api.deps import get_submission_service, get_upload_service
from app.core.errors import InvalidBodyError, UploadRejectedError
from app.schemas.submission import Submission, UploadedFile
from app.services.submission_service import SubmissionService
from app.services.upload_service import UploadService

logger = logging.getLogger(__name__)

router = APIRouter()

FILE_FIELD = "fileupload"
FORM_MEDIA_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _collect_value(fields: Dict[str, Any], key: str, value: str) -> None:
    if key not in fields:
        fields[key] = value
    elif isinstance(fields[key], list):
        fields[key].append(value)
    else:
        fields[key] = [fields[key], value]


async def _read_upload(part: UploadFile, max_bytes: int) -> Optional[UploadedFile]:
    # one byte past the limit is enough to reject an oversized file
    content = await part.read(max_bytes + 1)
    if not part.filename and not content:
        # empty <input type="file"> posted by a browser
        return None
    return UploadedFile(
        filename=part.filename or "file",
        content_type=part.content_type or "application/octet-stream",
        content=content,
    )


def _media_type(content_type: str) -> Tuple[str, Headers]:
    """Lower-case media type plus request headers carrying it normalized."""
    media_type, sep, params = content_type.partition(";")
    media_type = media_type.strip().lower()
    return media_type, Headers(headers={"content-type": media_type + sep + params})


async def _parse_form(request: Request, media_type: str, headers: Headers) -> FormData:
    if media_type == "multipart/form-data":
        parser = MultiPartParser(headers, request.stream())
    else:
        parser = FormParser(headers, request.stream())
    try:
        return await parser.parse()
    except MultiPartException as exc:
        raise InvalidBodyError(exc.message) from exc


async def read_form(
    request: Request, max_bytes: int
) -> Tuple[Dict[str, Any], Optional[UploadedFile]]:
    """Split the request body into text fields and the single allowed file."""
    media_type, headers = _media_type(request.headers.get("content-type", ""))

    if media_type == "application/json":
        try:
            body = await request.json()
        except ValueError as exc:
            raise InvalidBodyError("Invalid JSON body.") from exc
        return (body if isinstance(body, dict) else {}), None

    if media_type not in FORM_MEDIA_TYPES:
        return {}, None

    fields: Dict[str, Any] = {}
    upload: Optional[UploadedFile] = None
    seen_file = False

    form = await _parse_form(request, media_type, headers)
    try:
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key != FILE_FIELD or seen_file:
                    raise UploadRejectedError("Unexpected field")
                seen_file = True
                upload = await _read_upload(value, max_bytes)
            else:
                _collect_value(fields, key, value)
    finally:
        await form.close()

    return fields, upload


async def resolve_submission(
    request: Request,
    upload_service: UploadService = Depends(get_upload_service),
) -> Submission:
    """Parse the form and store the attachment before the handler body runs."""
    fields, upload = await read_form(request, upload_service.settings.MAX_UPLOAD_BYTES)
    logger.info(
        "Submission received fields=%s has_file=%s", len(fields), upload is not None
    )
    file_reference = await upload_service.resolve_reference(upload)
    return Submission(fields=fields, file_reference=file_reference)


@router.post(
    "/submit",
    response_class=PlainTextResponse,
    summary="Submit an internship application",
    description="Accepts the application form with an optional jpeg/png/pdf file (max 5MB).",
    responses={
        400: {"description": "Missing required fields."},
        500: {"description": "Upload, save or email failure."},
    },
)
async def submit_application(
    submission: Submission = Depends(resolve_submission),
    service: SubmissionService = Depends(get_submission_service),
) -> PlainTextResponse:
    """Validate, record and email one internship application."""
    result = await service.process(submission)
    return PlainTextResponse(result.message, status_code=result.status_code)
