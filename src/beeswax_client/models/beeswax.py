# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Pydantic models for Beeswax API requests and responses."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class Credentials(BaseModel):
    """Login credentials for a Beeswax buzz account."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"

    __str__ = __repr__


class ResourceDescriptor(BaseModel):
    """REST path and identifier field for one Beeswax entity type."""

    endpoint: str
    id_field: str

    model_config = {"frozen": True}


class BeeswaxResponse(BaseModel):
    """Normalized envelope returned by every resource call."""

    success: bool
    payload: Any = None
    code: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, payload: Any) -> "BeeswaxResponse":
        """Build a successful envelope."""
        return cls(success=True, payload=payload)

    @classmethod
    def failure(cls, message: str, code: int = 400) -> "BeeswaxResponse":
        """Build an unsuccessful envelope."""
        return cls(success=False, code=code, message=message)


class CreativeAssetUpload(BaseModel):
    """Parameters for uploading a creative asset.

    Either ``source_url`` or ``creative_content_bytes`` must be set. The
    remaining fields are copied onto the creative_asset record.
    """

    source_url: Optional[str] = Field(default=None, alias="sourceUrl")
    creative_content_bytes: Optional[bytes] = Field(
        default=None, alias="creativeContentBytes"
    )
    advertiser_id: Optional[int] = None
    creative_asset_name: Optional[str] = None
    size_in_bytes: Optional[int] = None
    notes: Optional[str] = None
    active: Optional[bool] = None

    model_config = {"populate_by_name": True}

    @field_validator("source_url", "creative_asset_name", "notes")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings as missing."""
        return v or None

    def asset_definition(self) -> dict[str, Any]:
        """Metadata fields to send when creating the asset record."""
        return self.model_dump(
            include={
                "advertiser_id",
                "creative_asset_name",
                "size_in_bytes",
                "notes",
                "active",
            },
            exclude_none=True,
        )
