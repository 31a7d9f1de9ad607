from core.storage.credentials import (
    BotoStorageSession,
    CredentialProvider,
    DefaultCredentialChain,
    StaticCredentials,
    StorageSession,
)
from core.storage.errors import (
    ExpiryConfigurationError,
    GatewayError,
    MalformedNotificationError,
    SigningError,
    TransferError,
)
from core.storage.events import decode, decode_records, encode
from core.storage.gateway import StorageGateway
from core.storage.manager import StorageGatewayManager
from core.storage.types import PRESIGNED_URL_TTL, GrantMethod, StorageTarget

__all__ = [
    "BotoStorageSession",
    "CredentialProvider",
    "DefaultCredentialChain",
    "ExpiryConfigurationError",
    "GatewayError",
    "GrantMethod",
    "MalformedNotificationError",
    "PRESIGNED_URL_TTL",
    "SigningError",
    "StaticCredentials",
    "StorageGateway",
    "StorageGatewayManager",
    "StorageSession",
    "StorageTarget",
    "TransferError",
    "decode",
    "decode_records",
    "encode",
]
