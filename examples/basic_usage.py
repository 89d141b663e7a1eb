#!/usr/bin/env python3
# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Basic Beeswax client example.

Creates a campaign, edits it, lists every campaign of the advertiser and
deletes it again. Credentials come from BEESWAX_EMAIL / BEESWAX_PASSWORD.

Usage:
    python examples/basic_usage.py <advertiser_id>
"""

import asyncio
import sys

from beeswax_client import BeeswaxClient
from beeswax_client.config import settings


async def main(advertiser_id: int):
    creds = {"email": settings.beeswax_email, "password": settings.beeswax_password}

    async with BeeswaxClient(creds, api_root=settings.beeswax_api_root) as client:
        # No explicit login needed; the first 401 triggers one
        created = await client.campaigns.create(
            {
                "advertiser_id": advertiser_id,
                "campaign_name": "Example Campaign",
                "campaign_budget": 1000,
            }
        )
        campaign = created.payload
        print(f"Created campaign {campaign['campaign_id']}")

        edited = await client.campaigns.edit(
            campaign["campaign_id"], {"campaign_budget": 2000}
        )
        print(f"New budget: {edited.payload['campaign_budget']}")

        everything = await client.campaigns.query_all({"advertiser_id": advertiser_id})
        print(f"Advertiser has {len(everything.payload)} campaigns")

        deleted = await client.campaigns.delete(campaign["campaign_id"])
        print(f"Deleted campaign {deleted.payload['campaign_id']}")

        # Deleting twice is reported, not raised
        again = await client.campaigns.delete(campaign["campaign_id"])
        print(f"Second delete: {again.message}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(int(sys.argv[1])))
