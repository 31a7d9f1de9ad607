from __future__ import annotations

from fastapi import APIRouter, Request

from core.response_envelope import document_response
from services.upload_service import ingest_storage_events

router = APIRouter(prefix="/storage-events", tags=["Storage Events"])


@router.post("")
@document_response(
    message="Storage events received",
    success_example={
        "received": 1,
        "objects": [
            {"bucket": "media-assets", "key": "avatars/42.png", "size": 2048, "event_name": "ObjectCreated:Put"}
        ],
    },
    response_codes={422: "Malformed storage notification"},
)
async def receive_storage_events(request: Request):
    return ingest_storage_events(await request.body())
