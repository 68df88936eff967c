"""
Catalog Persistence

Database schema, validated catalog access and search analytics.
"""

from .catalog import CatalogSource, SqlCatalogSource
from .analytics import AnalyticsSink, SqlAnalyticsSink
from .validation import OfferRecordValidator, offer_from_record

__all__ = [
    'CatalogSource',
    'SqlCatalogSource',
    'AnalyticsSink',
    'SqlAnalyticsSink',
    'OfferRecordValidator',
    'offer_from_record',
]
