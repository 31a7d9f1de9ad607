from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

U64_MAX = 2**64 - 1


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class OwnerIdentity(_WireModel):
    principal_id: StrictStr = Field(alias="principalId")


class NotificationBucket(_WireModel):
    name: StrictStr
    owner_identity: OwnerIdentity = Field(alias="ownerIdentity")
    arn: StrictStr


class NotificationObject(_WireModel):
    key: StrictStr
    size: StrictInt = Field(ge=0, le=U64_MAX)
    e_tag: StrictStr = Field(alias="eTag")
    sequencer: StrictStr


class StorageNotification(_WireModel):
    schema_version: StrictStr = Field(alias="s3SchemaVersion")
    configuration_id: StrictStr = Field(alias="configurationId")
    bucket: NotificationBucket
    object: NotificationObject


class StorageEventRecord(_WireModel):
    event_version: StrictStr = Field(alias="eventVersion")
    event_source: StrictStr = Field(alias="eventSource")
    aws_region: StrictStr = Field(alias="awsRegion")
    event_time: datetime = Field(alias="eventTime")
    event_name: StrictStr = Field(alias="eventName")
    user_identity: OwnerIdentity = Field(alias="userIdentity")
    s3: StorageNotification


class StorageEventEnvelope(_WireModel):
    records: list[StorageEventRecord] = Field(alias="Records")


class StorageEventSummary(BaseModel):
    bucket: str
    key: str
    size: int
    event_name: str


class StorageEventsOut(BaseModel):
    received: int
    objects: list[StorageEventSummary]
