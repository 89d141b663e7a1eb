# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Tests for Beeswax models."""

import pytest
from pydantic import ValidationError

from beeswax_client.models.beeswax import (
    BeeswaxResponse,
    CreativeAssetUpload,
    Credentials,
    ResourceDescriptor,
)


class TestBeeswaxModels:
    """Tests for Beeswax Pydantic models."""

    def test_credentials_required(self):
        """Test both credential fields must be non-empty."""
        with pytest.raises(ValidationError):
            Credentials(email="foo@bar.com", password="")
        with pytest.raises(ValidationError):
            Credentials(password="very good password")

    def test_resource_descriptor_is_frozen(self):
        """Test descriptors cannot be changed after creation."""
        descriptor = ResourceDescriptor(endpoint="/rest/campaign", id_field="campaign_id")
        with pytest.raises(ValidationError):
            descriptor.endpoint = "/rest/other"

    def test_response_helpers(self):
        """Test envelope constructors."""
        assert BeeswaxResponse.ok([1, 2]) == BeeswaxResponse(success=True, payload=[1, 2])
        failure = BeeswaxResponse.failure("Not found")
        assert failure.success is False
        assert failure.code == 400
        assert failure.payload is None
        assert failure.model_dump(exclude_none=True) == {
            "success": False,
            "code": 400,
            "message": "Not found",
        }

    def test_upload_from_aliases(self):
        """Test upload params accept camelCase source fields."""
        params = CreativeAssetUpload.model_validate(
            {"sourceUrl": "https://abc/def.jpeg", "creativeContentBytes": b"abc"}
        )
        assert params.source_url == "https://abc/def.jpeg"
        assert params.creative_content_bytes == b"abc"

    def test_upload_blank_strings(self):
        """Test empty strings count as missing."""
        params = CreativeAssetUpload(source_url="", creative_asset_name="", notes="")
        assert params.source_url is None
        assert params.creative_asset_name is None
        assert params.notes is None

    def test_asset_definition(self):
        """Test only set metadata fields end up in the asset definition."""
        params = CreativeAssetUpload(
            source_url="https://abc/def.jpeg",
            advertiser_id=1234,
            notes="some notes",
            active=False,
        )
        assert params.asset_definition() == {
            "advertiser_id": 1234,
            "notes": "some notes",
            "active": False,
        }
