# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Async client for the Beeswax advertising exchange API."""

from .clients import (
    RESOURCES,
    BeeswaxClient,
    BeeswaxConfigError,
    BeeswaxError,
    BeeswaxResponseError,
    BeeswaxStatusError,
    BeeswaxUploadError,
    ResourceHelper,
)
from .models import BeeswaxResponse, CreativeAssetUpload, Credentials, ResourceDescriptor

__version__ = "0.1.0"

__all__ = [
    "BeeswaxClient",
    "ResourceHelper",
    "RESOURCES",
    "BeeswaxResponse",
    "CreativeAssetUpload",
    "Credentials",
    "ResourceDescriptor",
    "BeeswaxError",
    "BeeswaxConfigError",
    "BeeswaxResponseError",
    "BeeswaxStatusError",
    "BeeswaxUploadError",
]
