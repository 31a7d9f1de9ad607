from __future__ import annotations

from fastapi import APIRouter, Request

from core.response_envelope import document_response
from schemas.grant_schema import GrantRequest
from services.upload_service import issue_download_grant, issue_upload_grant, store_object

router = APIRouter(prefix="/uploads", tags=["Uploads"])

_GRANT_ERRORS = {
    422: "Invalid payload",
    500: "Presigned URL lifetime misconfigured",
    502: "Storage backend could not sign the request",
}


@router.post("/upload-grants")
@document_response(
    message="Upload grant issued",
    status_code=201,
    success_example={
        "key": "avatars/42.png",
        "url": "https://media-assets.s3.amazonaws.com/avatars/42.png?X-Amz-Expires=86400",
        "method": "PUT",
        "expires_in": 86400,
    },
    response_codes=_GRANT_ERRORS,
)
async def create_upload_grant(payload: GrantRequest):
    return await issue_upload_grant(key=payload.key)


@router.post("/download-grants")
@document_response(message="Download grant issued", status_code=201, response_codes=_GRANT_ERRORS)
async def create_download_grant(payload: GrantRequest):
    return await issue_download_grant(key=payload.key)


@router.put("/objects/{key:path}")
@document_response(
    message="Object stored",
    status_code=201,
    success_example={"key": "notes/hello.txt", "size": 10},
    response_codes={413: "Object too large for a direct upload", 502: "Storage backend rejected the write"},
)
async def put_object(key: str, request: Request):
    return await store_object(key=key, chunks=request.stream())
