from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import BinaryIO, Union

PRESIGNED_URL_TTL = timedelta(hours=24)

# SigV4 query signatures cannot outlive seven days.
MAX_PRESIGNED_URL_TTL = timedelta(days=7)

ObjectBody = Union[bytes, bytearray, BinaryIO]


class GrantMethod(str, Enum):
    PUT = "PUT"
    GET = "GET"


@dataclass(frozen=True)
class StorageTarget:
    bucket: str
    region: str
