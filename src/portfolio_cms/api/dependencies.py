"""Shared helpers for API routes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from fastapi import Request, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from portfolio_cms.storage.attachments import IncomingFile

SchemaT = TypeVar("SchemaT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_upload(upload: UploadFile | None) -> IncomingFile | None:
    """Read a multipart upload into memory.

    Returns:
        IncomingFile | None: The payload, or None when no file was sent.
    """
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return IncomingFile(filename=upload.filename, data=data, content_type=upload.content_type)


async def read_uploads(uploads: Sequence[UploadFile] | None) -> list[IncomingFile]:
    """Read several multipart uploads, skipping empty file fields."""
    files: list[IncomingFile] = []
    for upload in uploads or ():
        incoming = await read_upload(upload)
        if incoming is not None:
            files.append(incoming)
    return files


async def read_json_or_form(request: Request, schema: type[SchemaT]) -> SchemaT:
    """Validate a request body sent either as JSON or as form fields.

    An empty body validates as an empty object, so missing fields are left to
    the service's own checks.

    Raises:
        RequestValidationError: If the body is malformed JSON or does not fit
            ``schema`` (answered with 422 like any other body error).
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields: Any = {key: value for key, value in form.items() if isinstance(value, str)}
    elif await request.body():
        try:
            fields = await request.json()
        except ValueError as exc:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error"}]
            ) from exc
    else:
        fields = {}

    try:
        return schema.model_validate(fields)
    except SchemaValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


def json_or_form_body(schema: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI request body for routes that read ``read_json_or_form``."""
    body_schema = schema.model_json_schema(by_alias=True)
    return {
        "requestBody": {
            "content": {
                "application/json": {"schema": body_schema},
                "application/x-www-form-urlencoded": {"schema": body_schema},
            },
        }
    }
