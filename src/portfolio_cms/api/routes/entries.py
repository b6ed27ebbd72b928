"""Routes for single-image entries: blogs, resumes, books and certificates.

Each kind gets its own router. Creation differs per kind (form fields), while
listing and deletion are registered by ``_add_list_and_delete``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi import Path as PathParam
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from portfolio_cms.api.dependencies import read_upload
from portfolio_cms.api.schemas.common import MessageResponse
from portfolio_cms.api.schemas.entries import (
    BlogResponse,
    BookResponse,
    CertificateResponse,
    ResumeResponse,
)
from portfolio_cms.data.crud.repository import MAX_RECORD_ID
from portfolio_cms.services.entries import (
    BLOG,
    BOOK,
    CERTIFICATE,
    RESUME,
    EntryKind,
    create_entry,
    delete_entry,
    list_entries,
)

blogs_router = APIRouter(prefix="/blogs", tags=["blogs"])
resumes_router = APIRouter(prefix="/resumes", tags=["resumes"])
books_router = APIRouter(prefix="/books", tags=["books"])
certificates_router = APIRouter(prefix="/certificates", tags=["certificates"])

ImageUpload = Annotated[UploadFile | None, File(description="Image file")]


def _add_list_and_delete(
    router: APIRouter, kind: EntryKind, response_model: type[BaseModel]
) -> None:
    plural = f"{kind.label.lower()}s"

    def list_endpoint() -> list[BaseModel]:
        return [response_model(**entry) for entry in list_entries(kind)]

    def delete_endpoint(
        entry_id: Annotated[int, PathParam(description="Entry ID", ge=1, le=MAX_RECORD_ID)],
    ) -> MessageResponse:
        delete_entry(kind, entry_id)
        return MessageResponse(message=f"{kind.label} deleted")

    router.add_api_route(
        "",
        list_endpoint,
        methods=["GET"],
        response_model=list[response_model],
        summary=f"List {plural}",
        description=f"Return all {plural}, newest first.",
        name=f"list_{plural}",
    )
    router.add_api_route(
        "/{entry_id}",
        delete_endpoint,
        methods=["DELETE"],
        response_model=MessageResponse,
        summary=f"Delete a {kind.label.lower()}",
        description=f"Delete a {kind.label.lower()} and its image file.",
        responses={404: {"description": f"{kind.label} not found"}},
        name=f"delete_{kind.label.lower()}",
    )


@blogs_router.post(
    "",
    response_model=BlogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a blog post",
    responses={400: {"description": "Missing fields"}},
)
async def create_blog_endpoint(
    image: ImageUpload = None,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
) -> BlogResponse:
    incoming = await read_upload(image)
    fields = {"title": title, "description": description}
    return BlogResponse(**await run_in_threadpool(create_entry, BLOG, fields, incoming))


@resumes_router.post(
    "",
    response_model=ResumeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a resume page",
    responses={400: {"description": "Missing data"}},
)
async def create_resume_endpoint(
    image: ImageUpload = None,
    heading: Annotated[str | None, Form()] = None,
) -> ResumeResponse:
    incoming = await read_upload(image)
    fields = {"heading": heading}
    return ResumeResponse(**await run_in_threadpool(create_entry, RESUME, fields, incoming))


@books_router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    responses={400: {"description": "Missing data"}},
)
async def create_book_endpoint(
    image: ImageUpload = None,
    name: Annotated[str | None, Form()] = None,
    link: Annotated[str | None, Form(description="External URL")] = None,
) -> BookResponse:
    incoming = await read_upload(image)
    fields = {"name": name, "link": link}
    return BookResponse(**await run_in_threadpool(create_entry, BOOK, fields, incoming))


@certificates_router.post(
    "",
    response_model=CertificateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a certificate",
    description="Only jpg, jpeg, png and gif images are accepted.",
    responses={400: {"description": "Missing title or image, or unsupported file type"}},
)
async def create_certificate_endpoint(
    image: ImageUpload = None,
    title: Annotated[str | None, Form()] = None,
) -> CertificateResponse:
    incoming = await read_upload(image)
    fields = {"title": title}
    return CertificateResponse(
        **await run_in_threadpool(create_entry, CERTIFICATE, fields, incoming)
    )


_add_list_and_delete(blogs_router, BLOG, BlogResponse)
_add_list_and_delete(resumes_router, RESUME, ResumeResponse)
_add_list_and_delete(books_router, BOOK, BookResponse)
_add_list_and_delete(certificates_router, CERTIFICATE, CertificateResponse)
