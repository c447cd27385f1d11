"""
API Request/Response Schemas using Pydantic.

Structure of HTTP responses for the myip API.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List

from myip.domain.entities import FetchResponse


class EventSchema(BaseModel):
    action: str = Field("", description="Registry event action, e.g. registration")
    date: str = Field("", description="Registry event date as returned by RDAP")


class AddressInfoResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ip: str = Field(..., description="Resolved caller address")
    count_call: int = Field(0, description="Number of requests seen for this address")
    country: str = Field("", description="Registry country code")
    handle: str = Field("", description="Registry network handle")
    ip_version: str = Field("", alias="ipVersion", description="v4 or v6")
    name: str = Field("", description="Registry network name")
    type: str = Field("", description="Registry allocation type")
    events: List[EventSchema] = Field(default_factory=list, description="Registry events in registry order")

    @classmethod
    def from_fetch(cls, response: FetchResponse) -> "AddressInfoResponse":
        record = response.record
        return cls(
            ip=response.address,
            count_call=response.call_count,
            country=record.country,
            handle=record.handle,
            ip_version=record.ip_version,
            name=record.name,
            type=record.type,
            events=[EventSchema(action=e.action, date=e.date) for e in response.events],
        )
