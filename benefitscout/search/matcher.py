"""
Offer Matching Module

Filters an offer catalog against a free-text purchase intent:
1. Normalize the query (trimmed, lowercase)
2. Keep offers whose searchable text contains the query
3. Preserve catalog order (the catalog is pre-sorted by priority score)
4. Fall back to the top of the catalog when nothing matches
5. Flag the first result as the best offer
6. Report the search to an analytics sink (failures are swallowed)
"""

import logging
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING

from benefitscout.errors import CatalogError
from .offers import MatchedOffer, MatchResult, Offer

if TYPE_CHECKING:
    from benefitscout.ingest.analytics import AnalyticsSink
    from benefitscout.ingest.catalog import CatalogSource


logger = logging.getLogger(__name__)

# Number of catalog offers returned when the query matches nothing
DEFAULT_FALLBACK_COUNT = 3

Dispatcher = Callable[..., None]


def normalize_query(query: Optional[str]) -> str:
    """Trim and lowercase a query (None becomes an empty string)."""
    return (query or "").strip().lower()


def offer_matches(offer: Offer, normalized_query: str) -> bool:
    """Check whether any searchable field of the offer contains the query."""
    return any(normalized_query in text.lower() for text in offer.searchable_text())


def search_offers(
    catalog: Sequence[Offer],
    query: Optional[str],
    fallback_count: int = DEFAULT_FALLBACK_COUNT
) -> MatchResult:
    """
    Match a catalog against a query.

    Never raises for empty catalogs or queries. An empty query matches
    every offer.

    Args:
        catalog: Offers in priority order
        query: Free-text purchase intent
        fallback_count: How many catalog offers to return when nothing matches

    Returns:
        MatchResult in catalog order, first entry flagged as best offer
    """
    normalized = normalize_query(query)
    matched = [offer for offer in catalog if offer_matches(offer, normalized)]

    is_fallback = not matched
    if is_fallback:
        matched = list(catalog[:fallback_count])

    return MatchResult(
        query=normalized,
        matches=tuple(
            MatchedOffer(offer=offer, is_best_offer=(index == 0))
            for index, offer in enumerate(matched)
        ),
        is_fallback=is_fallback,
    )


def load_catalog(source: 'CatalogSource', limit: Optional[int] = None) -> List[Offer]:
    """
    Fetch the featured catalog, degrading to an empty catalog on failure.

    Args:
        source: Catalog data source
        limit: Maximum number of offers to fetch (source default if None)

    Returns:
        List of offers (empty if the source is unreachable)
    """
    try:
        if limit is None:
            return list(source.get_featured_offers())
        return list(source.get_featured_offers(limit=limit))
    except CatalogError as e:
        logger.warning(f"Catalog unavailable, continuing with empty catalog: {e}")
        return []


def _run_inline(func: Callable[..., None], *args) -> None:
    func(*args)


class OfferMatcher:
    """
    Offer search with analytics reporting.

    The analytics call is handed to `dispatch`, which runs it inline by
    default. The HTTP layer passes `BackgroundTasks.add_task` so the
    event is recorded after the response is sent.
    """

    def __init__(
        self,
        analytics: Optional['AnalyticsSink'] = None,
        dispatch: Optional[Dispatcher] = None,
        fallback_count: int = DEFAULT_FALLBACK_COUNT
    ):
        self.analytics = analytics
        self.dispatch = dispatch or _run_inline
        self.fallback_count = fallback_count

    def search(
        self,
        catalog: Sequence[Offer],
        query: str,
        user_id: Optional[str] = None
    ) -> MatchResult:
        """
        Match the catalog and report the search.

        Args:
            catalog: Offers in priority order
            query: Free-text purchase intent
            user_id: Optional user performing the search

        Returns:
            MatchResult (unaffected by analytics failures)
        """
        result = search_offers(catalog, query, fallback_count=self.fallback_count)
        logger.info(
            f"Search '{result.query}' returned {len(result)} offers"
            f"{' (fallback)' if result.is_fallback else ''}"
        )

        if self.analytics is not None:
            try:
                self.dispatch(self._report_search, user_id, query, len(result))
            except Exception as e:
                logger.warning(f"Could not schedule search analytics: {e}")

        return result

    def _report_search(self, user_id: Optional[str], query: str, result_count: int) -> None:
        """Record a search event; errors are logged and dropped, never retried."""
        try:
            self.analytics.log_search(user_id, query, result_count)
        except Exception as e:
            logger.warning(f"Failed to log search '{query}': {e}")
