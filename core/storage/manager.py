from __future__ import annotations

from threading import Lock

from core.settings import get_settings
from core.storage.credentials import DefaultCredentialChain
from core.storage.gateway import StorageGateway


class StorageGatewayManager:
    _instance: "StorageGatewayManager | None" = None
    _lock = Lock()

    def __init__(self, gateway: StorageGateway, *, expose_error_reasons: bool = True) -> None:
        self._gateway = gateway
        self._expose_error_reasons = expose_error_reasons

    @classmethod
    def configure(cls, gateway: StorageGateway, *, expose_error_reasons: bool = True) -> "StorageGatewayManager":
        with cls._lock:
            cls._instance = cls(gateway, expose_error_reasons=expose_error_reasons)
            return cls._instance

    @classmethod
    def configure_from_settings(cls) -> "StorageGatewayManager":
        settings = get_settings()
        gateway = StorageGateway(
            settings.s3_bucket_name,
            settings.s3_region,
            credentials=DefaultCredentialChain(endpoint_url=settings.s3_endpoint_url),
        )
        return cls.configure(gateway, expose_error_reasons=not settings.is_production)

    @classmethod
    def get_instance(cls) -> "StorageGatewayManager":
        if cls._instance is None:
            return cls.configure_from_settings()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None

    @property
    def gateway(self) -> StorageGateway:
        return self._gateway

    @property
    def expose_error_reasons(self) -> bool:
        """Whether backend failure messages may be returned to HTTP clients."""
        return self._expose_error_reasons
