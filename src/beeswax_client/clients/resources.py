# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Beeswax entity types and the CRUD helpers bound to each of them."""

from typing import TYPE_CHECKING, Any, Optional

from ..models.beeswax import BeeswaxResponse, ResourceDescriptor

if TYPE_CHECKING:
    from .beeswax_client import BeeswaxClient


RESOURCES: dict[str, ResourceDescriptor] = {
    "advertisers": ResourceDescriptor(
        endpoint="/rest/advertiser", id_field="advertiser_id"
    ),
    "campaigns": ResourceDescriptor(endpoint="/rest/campaign", id_field="campaign_id"),
    "creatives": ResourceDescriptor(endpoint="/rest/creative", id_field="creative_id"),
    "line_items": ResourceDescriptor(
        endpoint="/rest/line_item", id_field="line_item_id"
    ),
    "creative_line_items": ResourceDescriptor(
        endpoint="/rest/creative_line_item", id_field="cli_id"
    ),
    "targeting_templates": ResourceDescriptor(
        endpoint="/rest/targeting_template", id_field="targeting_template_id"
    ),
}


class ResourceHelper:
    """CRUD operations for one entity type, bound to a client.

    Every call delegates to the matching generic method on
    :class:`BeeswaxClient` with this resource's endpoint and id field.
    """

    def __init__(self, client: "BeeswaxClient", descriptor: ResourceDescriptor):
        self._client = client
        self.descriptor = descriptor

    @property
    def endpoint(self) -> str:
        return self.descriptor.endpoint

    @property
    def id_field(self) -> str:
        return self.descriptor.id_field

    async def find(self, id: Any) -> BeeswaxResponse:
        """Fetch a single entity by id. ``payload`` is None if it does not exist."""
        return await self._client._find(self.endpoint, self.id_field, id)

    async def query(self, filter: Optional[dict[str, Any]] = None) -> BeeswaxResponse:
        """Fetch one page of entities matching ``filter``."""
        return await self._client._query(self.endpoint, filter)

    async def query_all(
        self, filter: Optional[dict[str, Any]] = None
    ) -> BeeswaxResponse:
        """Fetch every entity matching ``filter``, following pagination."""
        return await self._client._query_all(self.endpoint, self.id_field, filter)

    async def create(self, body: Any) -> BeeswaxResponse:
        """Create an entity and return it as stored by Beeswax."""
        return await self._client._create(self.endpoint, self.id_field, body)

    async def edit(
        self, id: Any, body: Any, fail_on_not_found: bool = False
    ) -> BeeswaxResponse:
        """Update an entity and return it as stored by Beeswax."""
        return await self._client._edit(
            self.endpoint, self.id_field, id, body, fail_on_not_found
        )

    async def delete(self, id: Any, fail_on_not_found: bool = False) -> BeeswaxResponse:
        """Delete an entity and return its last state."""
        return await self._client._delete(
            self.endpoint, self.id_field, id, fail_on_not_found
        )

    def __repr__(self) -> str:
        return f"ResourceHelper(endpoint={self.endpoint!r}, id_field={self.id_field!r})"
