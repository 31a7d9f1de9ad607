from __future__ import annotations

import asyncio
import logging

from core.storage.credentials import CredentialProvider, DefaultCredentialChain, StorageSession
from core.storage.errors import ExpiryConfigurationError, SigningError, TransferError
from core.storage.types import (
    MAX_PRESIGNED_URL_TTL,
    PRESIGNED_URL_TTL,
    GrantMethod,
    ObjectBody,
    StorageTarget,
)

logger = logging.getLogger(__name__)


def presigned_url_expiry_seconds() -> int:
    seconds = PRESIGNED_URL_TTL.total_seconds()
    if not seconds.is_integer() or not 0 < seconds <= MAX_PRESIGNED_URL_TTL.total_seconds():
        raise ExpiryConfigurationError(
            "Presigned URL lifetime cannot be encoded",
            details={"ttl_seconds": seconds, "max_seconds": MAX_PRESIGNED_URL_TTL.total_seconds()},
        )
    return int(seconds)


class StorageGateway:
    """Issues presigned URLs for, and writes directly to, a single bucket.

    A backend session is resolved from ``credentials`` on every operation and
    dropped when the operation ends. The target is the only state the gateway
    keeps, and it is immutable, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        bucket: str,
        region: str,
        *,
        credentials: CredentialProvider | None = None,
    ) -> None:
        self._target = StorageTarget(bucket=bucket, region=region)
        self._credentials = credentials if credentials is not None else DefaultCredentialChain()

    @property
    def target(self) -> StorageTarget:
        return self._target

    def _session(self) -> StorageSession:
        return self._credentials.resolve_session(self._target)

    async def _mint_grant(self, method: GrantMethod, key: str) -> str:
        expires_in = presigned_url_expiry_seconds()

        def _sign() -> str:
            return self._session().presign(
                method=method,
                bucket=self._target.bucket,
                key=key,
                expires_in=expires_in,
            )

        try:
            url = await asyncio.to_thread(_sign)
        except Exception as err:
            logger.warning(
                "Presign %s failed bucket=%s key=%s: %s",
                method.value,
                self._target.bucket,
                key,
                err,
            )
            raise SigningError(
                "Could not generate a presigned URL for the requested object",
                details={"bucket": self._target.bucket, "key": key, "method": method.value, "reason": str(err)},
            ) from err

        logger.info(
            "Issued %s grant bucket=%s key=%s expires_in=%s",
            method.value,
            self._target.bucket,
            key,
            expires_in,
        )
        return url

    async def mint_upload_grant(self, key: str) -> str:
        return await self._mint_grant(GrantMethod.PUT, key)

    async def mint_download_grant(self, key: str) -> str:
        return await self._mint_grant(GrantMethod.GET, key)

    async def put_object(self, key: str, body: ObjectBody) -> None:
        def _upload() -> None:
            self._session().upload(bucket=self._target.bucket, key=key, body=body)

        try:
            await asyncio.to_thread(_upload)
        except Exception as err:
            logger.warning(
                "Direct write failed bucket=%s key=%s: %s",
                self._target.bucket,
                key,
                err,
            )
            raise TransferError(
                "Could not write the object to storage",
                details={"bucket": self._target.bucket, "key": key, "reason": str(err)},
            ) from err

        logger.info("Stored object bucket=%s key=%s", self._target.bucket, key)
