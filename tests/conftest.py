from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit

import pytest

from core.storage.credentials import CredentialProvider, StorageSession
from core.storage.gateway import StorageGateway
from core.storage.manager import StorageGatewayManager
from core.storage.types import GrantMethod, ObjectBody, StorageTarget

_DATE_FORMAT = "%Y%m%dT%H%M%SZ"


class FakeClock:
    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class _FakeSession(StorageSession):
    def __init__(self, store: "InMemoryObjectStore", target: StorageTarget) -> None:
        self._store = store
        self._target = target

    def presign(self, *, method: GrantMethod, bucket: str, key: str, expires_in: int) -> str:
        return self._store.sign_url(method=method.value, bucket=bucket, key=key, expires_in=expires_in)

    def upload(self, *, bucket: str, key: str, body: ObjectBody) -> None:
        if self._store.upload_error is not None:
            raise self._store.upload_error
        data = body if isinstance(body, (bytes, bytearray)) else body.read()
        self._store.objects[(bucket, key)] = bytes(data)


class InMemoryObjectStore(CredentialProvider):
    """Object store stand-in that signs and verifies URLs against its own clock.

    The request method is part of the signed string but not of the URL, so a
    URL signed for PUT fails verification when replayed as GET.
    """

    def __init__(self, *, clock: FakeClock | None = None, secret: bytes = b"fake-secret") -> None:
        self.clock = clock or FakeClock()
        self._secret = secret
        self.objects: dict[tuple[str, str], bytes] = {}
        self.sessions_resolved = 0
        self.resolve_error: Exception | None = None
        self.upload_error: Exception | None = None

    def resolve_session(self, target: StorageTarget) -> StorageSession:
        self.sessions_resolved += 1
        if self.resolve_error is not None:
            raise self.resolve_error
        return _FakeSession(self, target)

    def _sign(self, *, method: str, bucket: str, key: str, issued_at: str, expires_in: str) -> str:
        message = "\n".join([method, bucket, key, issued_at, expires_in]).encode()
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    def sign_url(self, *, method: str, bucket: str, key: str, expires_in: int) -> str:
        if not key:
            raise ValueError("Invalid length for parameter Key, value: 0, valid min length: 1")
        issued_at = self.clock.now.strftime(_DATE_FORMAT)
        query = {
            "X-Amz-Date": issued_at,
            "X-Amz-Expires": str(expires_in),
            "X-Amz-Signature": self._sign(
                method=method, bucket=bucket, key=key, issued_at=issued_at, expires_in=str(expires_in)
            ),
        }
        return f"https://{bucket}.storage.test/{quote(key, safe='/')}?{urlencode(query)}"

    def handle(self, method: str, url: str, body: bytes | None = None) -> tuple[int, bytes]:
        parts = urlsplit(url)
        bucket = parts.netloc.split(".", 1)[0]
        key = unquote(parts.path.lstrip("/"))
        params = {name: values[0] for name, values in parse_qs(parts.query).items()}

        try:
            issued_at = params["X-Amz-Date"]
            expires_in = params["X-Amz-Expires"]
            signature = params["X-Amz-Signature"]
        except KeyError:
            return 403, b"MissingSignature"

        expected = self._sign(method=method, bucket=bucket, key=key, issued_at=issued_at, expires_in=expires_in)
        if not hmac.compare_digest(expected, signature):
            return 403, b"SignatureDoesNotMatch"

        issued = datetime.strptime(issued_at, _DATE_FORMAT).replace(tzinfo=timezone.utc)
        if self.clock.now > issued + timedelta(seconds=int(expires_in)):
            return 403, b"Request has expired"

        if method == "PUT":
            self.objects[(bucket, key)] = body or b""
            return 200, b""
        if (bucket, key) not in self.objects:
            return 404, b"NoSuchKey"
        return 200, self.objects[(bucket, key)]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def object_store(clock: FakeClock) -> InMemoryObjectStore:
    return InMemoryObjectStore(clock=clock)


@pytest.fixture
def gateway(object_store: InMemoryObjectStore) -> StorageGateway:
    return StorageGateway("media-assets", "us-east-1", credentials=object_store)


@pytest.fixture(autouse=True)
def _reset_gateway_manager():
    StorageGatewayManager.reset()
    yield
    StorageGatewayManager.reset()
