"""
Public API Endpoints

Offer search and read-only catalog browsing.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query

from benefitscout.config import settings
from benefitscout.errors import CatalogError
from benefitscout.ingest.analytics import AnalyticsSink
from benefitscout.ingest.catalog import CatalogSource
from benefitscout.search import (
    MatchedOffer, Offer, OfferMatcher, classify_expiry, format_benefit,
    load_catalog, search_offers,
)
from benefitscout.api.dependencies import get_analytics_sink, get_catalog_source
from benefitscout.api.exceptions import CategoryNotFoundError
from benefitscout.api.models import (
    BenefitTagResponse, ExpiryResponse, OfferItem, OfferListResponse, SearchResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["public"])


def to_offer_item(offer: Offer, is_best_offer: bool = False, now: Optional[datetime] = None) -> OfferItem:
    """Build the API representation of an offer with its display tags."""
    benefit = format_benefit(offer)
    expiry = classify_expiry(offer.valid_until, now)
    return OfferItem(
        offer_id=offer.id,
        title=offer.title,
        description=offer.description,
        merchant_name=offer.merchant_name,
        program_name=offer.program_name,
        institution_name=offer.institution_name,
        category_name=offer.category_name,
        offer_type=offer.offer_type,
        cashback_percentage=offer.cashback_percentage,
        discount_percentage=offer.discount_percentage,
        points_multiplier=offer.points_multiplier,
        valid_until=offer.valid_until,
        priority_score=offer.priority_score,
        benefit=BenefitTagResponse(label=benefit.label, kind=benefit.kind.value, magnitude=benefit.magnitude),
        expiry=ExpiryResponse(bucket=expiry.bucket.value, label=expiry.label, days_remaining=expiry.days_remaining),
        is_best_offer=is_best_offer,
    )


def _to_items(matches: List[MatchedOffer]) -> List[OfferItem]:
    now = datetime.now()
    return [to_offer_item(match.offer, match.is_best_offer, now) for match in matches]


@router.get("/offers/search", response_model=SearchResponse)
def search(
    background_tasks: BackgroundTasks,
    q: str = Query("", max_length=200, description="What the user wants to buy"),
    user_id: Optional[str] = Query(None, description="User performing the search"),
    catalog_source: CatalogSource = Depends(get_catalog_source),
    analytics: AnalyticsSink = Depends(get_analytics_sink)
) -> SearchResponse:
    """
    Find the best offers for a purchase intent.

    A blank query means "no search yet": the top of the featured catalog
    is returned and no search event is recorded.

    Args:
        q: Free-text query
        user_id: Optional user ID for analytics

    Returns:
        Ranked offers, the first flagged as the best option
    """
    catalog = load_catalog(catalog_source)

    if not q.strip():
        result = search_offers(catalog[:settings.fallback_result_count], "")
    else:
        matcher = OfferMatcher(
            analytics=analytics,
            dispatch=background_tasks.add_task,
            fallback_count=settings.fallback_result_count,
        )
        result = matcher.search(catalog, q, user_id=user_id)

    return SearchResponse(
        query=q.strip(),
        count=len(result),
        is_fallback=result.is_fallback,
        results=_to_items(list(result)),
    )


@router.get("/offers/featured", response_model=OfferListResponse)
def featured_offers(
    limit: int = Query(settings.featured_offers_limit, ge=1, le=50),
    catalog_source: CatalogSource = Depends(get_catalog_source)
) -> OfferListResponse:
    """Get the featured offers in priority order."""
    catalog = load_catalog(catalog_source, limit=limit)
    matches = [MatchedOffer(offer) for offer in catalog]
    return OfferListResponse(count=len(matches), offers=_to_items(matches))


@router.get("/categories")
def main_categories(catalog_source: CatalogSource = Depends(get_catalog_source)) -> Dict:
    """Get the top-level offer categories."""
    try:
        categories = catalog_source.get_main_categories()
    except CatalogError as e:
        logger.warning(f"Categories unavailable: {e}")
        categories = []
    return {"categories": categories, "count": len(categories)}


@router.get("/categories/{category_id}/subcategories")
def sub_categories(category_id: str, catalog_source: CatalogSource = Depends(get_catalog_source)) -> Dict:
    """
    Get the sub-categories of a category.

    Raises:
        CategoryNotFoundError: If the category does not exist
    """
    try:
        if catalog_source.get_category(category_id) is None:
            raise CategoryNotFoundError(category_id)
        categories = catalog_source.get_sub_categories(category_id)
    except CatalogError as e:
        logger.warning(f"Sub-categories of {category_id} unavailable: {e}")
        categories = []
    return {"parent_id": category_id, "categories": categories, "count": len(categories)}


@router.get("/categories/{category_id}/offers", response_model=OfferListResponse)
def category_offers(category_id: str, catalog_source: CatalogSource = Depends(get_catalog_source)) -> OfferListResponse:
    """Get active offers of a category in priority order (404 for an unknown category)."""
    try:
        if catalog_source.get_category(category_id) is None:
            raise CategoryNotFoundError(category_id)
        offers = catalog_source.get_offers_by_category(category_id)
    except CatalogError as e:
        logger.warning(f"Offers of category {category_id} unavailable: {e}")
        offers = []
    return OfferListResponse(count=len(offers), offers=_to_items([MatchedOffer(offer) for offer in offers]))


@router.get("/programs")
def all_programs(catalog_source: CatalogSource = Depends(get_catalog_source)) -> Dict:
    """Get all active benefit programs."""
    try:
        programs = catalog_source.get_all_programs()
    except CatalogError as e:
        logger.warning(f"Programs unavailable: {e}")
        programs = []
    return {"programs": programs, "count": len(programs)}


@router.get("/users/{user_id}/programs")
def user_programs(user_id: str, catalog_source: CatalogSource = Depends(get_catalog_source)) -> Dict:
    """Get the programs a user has joined."""
    try:
        programs = catalog_source.get_user_programs(user_id)
    except CatalogError as e:
        logger.warning(f"Programs of user {user_id} unavailable: {e}")
        programs = []
    return {"user_id": user_id, "programs": programs, "count": len(programs)}


@router.get("/users/{user_id}/stats")
def user_stats(user_id: str, catalog_source: CatalogSource = Depends(get_catalog_source)) -> Dict:
    """Get a user's benefit totals."""
    try:
        stats = catalog_source.get_user_stats(user_id)
    except CatalogError as e:
        logger.warning(f"Stats of user {user_id} unavailable: {e}")
        stats = {"total_points": 0, "total_cashback": 0.0, "active_programs": 0, "available_offers": 0}
    return {"user_id": user_id, **stats}


@router.get("/users/{user_id}/offers", response_model=OfferListResponse)
def user_offers(
    user_id: str,
    q: str = Query("", max_length=200, description="Optional text the offers must match"),
    catalog_source: CatalogSource = Depends(get_catalog_source)
) -> OfferListResponse:
    """Get active offers of the programs a user has joined, optionally filtered by text."""
    try:
        offers = catalog_source.get_user_offers(user_id, q or None)
    except CatalogError as e:
        logger.warning(f"Offers of user {user_id} unavailable: {e}")
        offers = []
    return OfferListResponse(count=len(offers), offers=_to_items([MatchedOffer(offer) for offer in offers]))
