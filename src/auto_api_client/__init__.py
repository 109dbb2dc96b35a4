"""Async Python client for the auto-api.com car listings API."""

from .client import AutoApiClient
from .config import ClientConfig, Settings
from .errors import ApiError, AuthError, AutoApiError, NetworkError
from .models import (
    ChangeItem,
    ChangesMeta,
    ChangesResult,
    OfferData,
    OfferItem,
    OffersMeta,
    OffersQuery,
    OffersResult,
)

__all__ = [
    "AutoApiClient",
    "ClientConfig",
    "Settings",
    "AutoApiError",
    "AuthError",
    "ApiError",
    "NetworkError",
    "OffersQuery",
    "OfferItem",
    "ChangeItem",
    "OffersMeta",
    "ChangesMeta",
    "OffersResult",
    "ChangesResult",
    "OfferData",
]
