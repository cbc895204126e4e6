"""Discovery feed, itinerary discovery, interaction tracking, similar items and trending refresh endpoints."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from discovery import discover_itineraries, generate_discovery_feed, find_similar_items, rank_trending
from discovery.models.feed import DiscoveryFeedResponse
from discovery.models.itinerary_discovery import ItineraryFilters
from discovery.stages.similar import find_source

from ..models import (
    FeedRequest,
    InteractionRequest,
    InteractionResponse,
    ItineraryDiscoveryRequest,
    ItineraryDiscoveryResponse,
    SimilarResponse,
    SourceItemInfo,
    TrendingResponse,
)
from ..services import INTERACTION_TYPES
from ..state import get_state

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_SIMILAR_LIMIT = 6
MAX_SIMILAR_LIMIT = 50


@router.post("/feed", response_model=DiscoveryFeedResponse)
def discovery_feed(request: FeedRequest):
    """
    Build the personalised discovery feed for one user.

    Request fields that are omitted are filled from the server's stores.
    """
    state = get_state()
    preferences = request.preferences or state.interaction_store.get_preferences(request.user_id)
    social = request.social or state.social_store.get_social_data(request.user_id)
    pools = request.pools or state.catalog.get_pools()
    trending = request.trending if request.trending is not None else state.catalog.get_trending()
    logger.debug(
        "[feed] user=%s supplied=%s",
        request.user_id,
        {
            "preferences": request.preferences is not None,
            "social": request.social is not None,
            "pools": request.pools is not None,
            "trending": request.trending is not None,
        },
    )
    return generate_discovery_feed(
        request.user_id,
        preferences,
        social,
        pools,
        trending,
        filters=request.filters,
        config=state.feed_config,
    )


@router.post("/itineraries", response_model=ItineraryDiscoveryResponse)
def itinerary_discovery(request: ItineraryDiscoveryRequest):
    """
    Rank catalog itineraries by relevance, popularity, freshness, quality and
    proximity, diversified and paginated.
    """
    state = get_state()
    filters = (request.filters or ItineraryFilters()).model_copy(
        update={"limit": request.limit, "offset": request.offset}
    )
    results = discover_itineraries(
        request.user_id,
        state.catalog.get_pools().itineraries,
        preferences=request.preferences,
        metrics=state.interaction_store.get_metrics(),
        user_location=request.location,
        filters=filters,
    )
    return ItineraryDiscoveryResponse(
        data=results,
        total=len(results),
        limit=request.limit,
        offset=request.offset,
    )


@router.post("/interaction", response_model=InteractionResponse)
def track_interaction(request: InteractionRequest):
    """Record a view/save/like/share/comment/search for the feed and trending."""
    if request.interaction_type not in INTERACTION_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"interactionType must be one of: {', '.join(INTERACTION_TYPES)}",
        )
    state = get_state()
    recorded = state.interaction_store.record(
        request.user_id,
        request.item_id,
        request.interaction_type,
        category=request.category,
    )
    return InteractionResponse(
        message=f"{request.interaction_type} interaction tracked successfully",
        timestamp=recorded["timestamp"],
    )


@router.get("/similar", response_model=SimilarResponse)
def similar_items(
    item_id: Optional[str] = Query(None, alias="itemId"),
    limit: int = Query(DEFAULT_SIMILAR_LIMIT, ge=1, le=MAX_SIMILAR_LIMIT),
):
    """Items of the same kind as itemId, most similar first."""
    if not item_id:
        raise HTTPException(status_code=400, detail="Missing itemId parameter")
    pools = get_state().catalog.get_pools()
    source = find_source(pools, item_id)
    if source is None:
        raise HTTPException(status_code=404, detail=f"Item not found: {item_id}")
    results = find_similar_items(item_id, pools, limit=limit) or []
    return SimilarResponse(
        data=results,
        total=len(results),
        source_item=SourceItemInfo(id=source.id, type=source.type.value, category=source.category),
    )


@router.post("/trending/refresh", response_model=TrendingResponse)
def refresh_trending():
    """Recompute the trending list from recorded interaction metrics."""
    state = get_state()
    metrics = state.interaction_store.get_metrics()
    trending = rank_trending(
        metrics,
        limit=state.config.trending_limit,
        now=datetime.now(timezone.utc),
    )
    state.catalog.set_trending(trending)
    logger.info("[trending] refreshed from %d items -> %d trending", len(metrics), len(trending))
    return TrendingResponse(trending=trending, total=len(trending))
