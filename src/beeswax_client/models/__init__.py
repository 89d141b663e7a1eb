# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Data models for the Beeswax client."""

from .beeswax import (
    BeeswaxResponse,
    CreativeAssetUpload,
    Credentials,
    ResourceDescriptor,
)

__all__ = [
    "BeeswaxResponse",
    "CreativeAssetUpload",
    "Credentials",
    "ResourceDescriptor",
]
