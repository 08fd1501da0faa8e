"""Data models for rental listings."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Listing(BaseModel):
    """Represents a single rental post as held by the remote and local stores.

    Field names follow Python conventions; the JSON wire format uses the
    camelCase aliases (``contactName``, ``contactPhone``).
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    contact_name: str = Field(alias="contactName")
    contact_phone: str = Field(alias="contactPhone")
    location: str
    price: str = ""
    details: str = ""
    # data URLs or external paths, in display order
    images: List[str] = Field(default_factory=list)
    timestamp: int


class UploadResult(BaseModel):
    """Response body of a multipart image upload."""

    paths: List[str]


ListingList = TypeAdapter(List[Listing])
