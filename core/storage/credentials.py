"""Backend session resolution for the storage gateway.

A ``CredentialProvider`` hands the gateway a ready-to-use ``StorageSession``
for one operation. The boto3 implementations below build a brand-new
``boto3.session.Session`` on every call, so the default credential chain
(environment, shared profile, container or instance role) is walked again
each time and nothing stale survives between operations.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from core.storage.types import GrantMethod, ObjectBody, StorageTarget

logger = logging.getLogger(__name__)

_CLIENT_METHODS = {
    GrantMethod.PUT: "put_object",
    GrantMethod.GET: "get_object",
}


class StorageSession(Protocol):
    def presign(self, *, method: GrantMethod, bucket: str, key: str, expires_in: int) -> str:
        ...

    def upload(self, *, bucket: str, key: str, body: ObjectBody) -> None:
        ...


class CredentialProvider(Protocol):
    def resolve_session(self, target: StorageTarget) -> StorageSession:
        ...


class BotoStorageSession(StorageSession):
    def __init__(self, client: Any) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    def presign(self, *, method: GrantMethod, bucket: str, key: str, expires_in: int) -> str:
        return self._client.generate_presigned_url(
            ClientMethod=_CLIENT_METHODS[method],
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in,
            HttpMethod=method.value,
        )

    def upload(self, *, bucket: str, key: str, body: ObjectBody) -> None:
        self._client.put_object(Bucket=bucket, Key=key, Body=body)


class DefaultCredentialChain(CredentialProvider):
    """Resolve credentials through boto3's default provider chain."""

    def __init__(self, *, endpoint_url: str | None = None) -> None:
        try:
            import boto3
            from botocore.config import Config
            from botocore.exceptions import NoCredentialsError
        except ModuleNotFoundError as err:
            raise RuntimeError("boto3 is required for the storage gateway") from err

        self._boto3 = boto3
        self._no_credentials_error = NoCredentialsError
        self._client_config = Config(signature_version="s3v4")
        self._endpoint_url = endpoint_url

    def _new_session(self, region: str) -> Any:
        return self._boto3.session.Session(region_name=region)

    def resolve_session(self, target: StorageTarget) -> BotoStorageSession:
        session = self._new_session(target.region)
        if session.get_credentials() is None:
            raise self._no_credentials_error()

        logger.debug("Resolved storage session for region=%s", target.region)
        client = session.client(
            "s3",
            region_name=target.region,
            endpoint_url=self._endpoint_url,
            config=self._client_config,
        )
        return BotoStorageSession(client)


class StaticCredentials(DefaultCredentialChain):
    """Fixed access keys, for S3-compatible endpoints and local runs."""

    def __init__(
        self,
        *,
        access_key_id: str,
        secret_access_key: str,
        session_token: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        super().__init__(endpoint_url=endpoint_url)
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._session_token = session_token

    def _new_session(self, region: str) -> Any:
        return self._boto3.session.Session(
            aws_access_key_id=self._access_key_id,
            aws_secret_access_key=self._secret_access_key,
            aws_session_token=self._session_token,
            region_name=region,
        )
