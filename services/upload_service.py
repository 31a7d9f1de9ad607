from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from tempfile import SpooledTemporaryFile

from core.errors import object_too_large, storage_not_configured
from core.storage import GatewayError, StorageGatewayManager, decode_records
from core.storage.errors import gateway_error_to_app_exception
from core.storage.events import NotificationPayload
from core.storage.gateway import presigned_url_expiry_seconds
from core.storage.types import GrantMethod
from schemas.grant_schema import GrantOut, StoredObjectOut
from schemas.notification_schema import StorageEventsOut, StorageEventSummary

logger = logging.getLogger(__name__)

# Larger objects go through an upload grant instead of this process.
MAX_DIRECT_UPLOAD_BYTES = 50 * 1024 * 1024
# Request bodies beyond this spill from memory to a temporary file.
SPOOL_MEMORY_BYTES = 1024 * 1024


def _manager() -> StorageGatewayManager:
    try:
        return StorageGatewayManager.get_instance()
    except RuntimeError as err:
        raise storage_not_configured(str(err)) from err


async def issue_upload_grant(*, key: str) -> GrantOut:
    manager = _manager()
    try:
        url = await manager.gateway.mint_upload_grant(key)
    except GatewayError as err:
        raise gateway_error_to_app_exception(err, include_reason=manager.expose_error_reasons) from err
    return GrantOut(key=key, url=url, method=GrantMethod.PUT, expires_in=presigned_url_expiry_seconds())


async def issue_download_grant(*, key: str) -> GrantOut:
    manager = _manager()
    try:
        url = await manager.gateway.mint_download_grant(key)
    except GatewayError as err:
        raise gateway_error_to_app_exception(err, include_reason=manager.expose_error_reasons) from err
    return GrantOut(key=key, url=url, method=GrantMethod.GET, expires_in=presigned_url_expiry_seconds())


async def store_object(*, key: str, chunks: AsyncIterator[bytes]) -> StoredObjectOut:
    """Write a streamed request body to ``key``.

    At most ``SPOOL_MEMORY_BYTES`` of the body is held in memory, and bodies
    over ``MAX_DIRECT_UPLOAD_BYTES`` are refused with 413 before anything is
    sent to the backend.
    """
    manager = _manager()
    with SpooledTemporaryFile(max_size=SPOOL_MEMORY_BYTES) as body:
        size = 0
        async for chunk in chunks:
            size += len(chunk)
            if size > MAX_DIRECT_UPLOAD_BYTES:
                raise object_too_large(MAX_DIRECT_UPLOAD_BYTES)
            body.write(chunk)
        body.seek(0)

        try:
            await manager.gateway.put_object(key, body)
        except GatewayError as err:
            raise gateway_error_to_app_exception(err, include_reason=manager.expose_error_reasons) from err
    return StoredObjectOut(key=key, size=size)


def ingest_storage_events(payload: NotificationPayload) -> StorageEventsOut:
    try:
        records = decode_records(payload)
    except GatewayError as err:
        raise gateway_error_to_app_exception(err) from err

    objects = [
        StorageEventSummary(
            bucket=record.s3.bucket.name,
            key=record.s3.object.key,
            size=record.s3.object.size,
            event_name=record.event_name,
        )
        for record in records
    ]
    for item in objects:
        logger.info("Object event %s bucket=%s key=%s size=%s", item.event_name, item.bucket, item.key, item.size)
    return StorageEventsOut(received=len(objects), objects=objects)
