"""Decoding of object-store event notifications.

The backend describes a finished operation with camelCase wire names
(``s3SchemaVersion``, ``ownerIdentity.principalId``, ``eTag`` ...). The
models in ``schemas.notification_schema`` map those names onto snake_case
attributes one to one. Decoding checks presence and wire type only: nothing
is defaulted, coerced or cross-checked against a bucket.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ValidationError
from pydantic_core import from_json

from core.storage.errors import MalformedNotificationError
from core.validation_errors import format_validation_error_details
from schemas.notification_schema import StorageEventEnvelope, StorageEventRecord, StorageNotification

NotificationPayload = Union[Mapping[str, Any], str, bytes, bytearray]

TEST_EVENT_NAME = "s3:TestEvent"


def _validate(model: type[BaseModel], payload: NotificationPayload, message: str) -> Any:
    try:
        if isinstance(payload, (str, bytes, bytearray)):
            return model.model_validate_json(payload)
        return model.model_validate(payload)
    except ValidationError as err:
        raise MalformedNotificationError(
            message,
            details=format_validation_error_details(
                err.errors(include_url=False, include_input=False),
                default_location="notification",
            ),
        ) from err


def decode(payload: NotificationPayload) -> StorageNotification:
    return _validate(StorageNotification, payload, "Storage notification is malformed")


def encode(notification: StorageNotification) -> dict[str, Any]:
    return notification.model_dump(mode="json", by_alias=True)


def _is_test_event(payload: NotificationPayload) -> bool:
    if isinstance(payload, Mapping):
        return payload.get("Event") == TEST_EVENT_NAME
    return False


def decode_records(payload: NotificationPayload) -> list[StorageEventRecord]:
    """Decode a ``{"Records": [...]}`` delivery into its records.

    The one-off test message the backend sends when a notification rule is
    created carries no records and decodes to an empty list.
    """
    if isinstance(payload, (str, bytes, bytearray)):
        # Same parser as model_validate_json, so nesting depth is bounded here too.
        try:
            parsed = from_json(payload)
        except ValueError as err:
            raise MalformedNotificationError(
                "Storage event delivery is not valid JSON",
                details={"reason": str(err)},
            ) from err
        payload = parsed

    if _is_test_event(payload):
        return []

    envelope = _validate(StorageEventEnvelope, payload, "Storage event delivery is malformed")
    return list(envelope.records)
