"""
Offer Search

Offer matching, benefit tags and expiry classification.
"""

from .offers import Offer, BenefitKind, BenefitTag, MatchedOffer, MatchResult
from .benefits import format_benefit, format_number
from .expiry import ExpiryBucket, ExpiryStatus, classify_expiry
from .matcher import OfferMatcher, search_offers, load_catalog, normalize_query

__all__ = [
    'Offer',
    'BenefitKind',
    'BenefitTag',
    'MatchedOffer',
    'MatchResult',
    'format_benefit',
    'format_number',
    'ExpiryBucket',
    'ExpiryStatus',
    'classify_expiry',
    'OfferMatcher',
    'search_offers',
    'load_catalog',
    'normalize_query',
]
