"""Pydantic request/response models for the API."""

from .discovery import (
    FeedRequest,
    InteractionRequest,
    InteractionResponse,
    ItineraryDiscoveryRequest,
    ItineraryDiscoveryResponse,
    SimilarResponse,
    SourceItemInfo,
    TrendingResponse,
)

__all__ = [
    "FeedRequest",
    "InteractionRequest",
    "InteractionResponse",
    "ItineraryDiscoveryRequest",
    "ItineraryDiscoveryResponse",
    "SimilarResponse",
    "SourceItemInfo",
    "TrendingResponse",
]
