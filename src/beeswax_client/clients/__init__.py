# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Client implementations for the Beeswax API."""

from .beeswax_client import (
    BeeswaxClient,
    BeeswaxConfigError,
    BeeswaxError,
    BeeswaxResponseError,
    BeeswaxStatusError,
    BeeswaxUploadError,
    is_not_found_error,
)
from .resources import RESOURCES, ResourceHelper

__all__ = [
    "BeeswaxClient",
    "ResourceHelper",
    "RESOURCES",
    # Errors
    "BeeswaxError",
    "BeeswaxConfigError",
    "BeeswaxResponseError",
    "BeeswaxStatusError",
    "BeeswaxUploadError",
    "is_not_found_error",
]
