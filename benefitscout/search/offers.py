"""
Offer Entities

Strongly-typed offer model used by the search engine, plus the result
types it produces. Offers are read-only: they are built by the ingest
layer (see benefitscout.ingest.validation) and never mutated here.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Offer:
    """A single benefit opportunity attached to a loyalty/cashback program."""
    id: str
    title: str
    program_name: str
    institution_name: str
    description: Optional[str] = None
    merchant_name: Optional[str] = None
    category_name: Optional[str] = None
    cashback_percentage: Optional[float] = None
    discount_percentage: Optional[float] = None
    points_multiplier: Optional[float] = None
    valid_until: Optional[date] = None
    priority_score: int = 0
    offer_type: Optional[str] = None  # cashback, points, discount, bonus

    def searchable_text(self) -> List[str]:
        """Text fields a query is matched against (absent fields skipped)."""
        fields = [
            self.title,
            self.merchant_name,
            self.program_name,
            self.institution_name,
            self.category_name,
        ]
        return [value for value in fields if value]


class BenefitKind(str, Enum):
    """Kind of benefit shown on an offer's tag."""
    CASHBACK = "cashback"
    DISCOUNT = "discount"
    POINTS = "points"
    GENERIC = "generic"


@dataclass(frozen=True)
class BenefitTag:
    """Display tag describing an offer's headline benefit."""
    label: str
    kind: BenefitKind
    magnitude: float = 0


@dataclass(frozen=True)
class MatchedOffer:
    """An offer placed in a search result."""
    offer: Offer
    is_best_offer: bool = False


@dataclass(frozen=True)
class MatchResult:
    """
    Ordered result of matching a catalog against a query.

    Only the first entry is flagged as the best offer. `is_fallback` is
    True when nothing matched and the top of the catalog was returned
    instead.
    """
    query: str
    matches: Tuple[MatchedOffer, ...] = field(default_factory=tuple)
    is_fallback: bool = False

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[MatchedOffer]:
        return iter(self.matches)

    @property
    def offers(self) -> List[Offer]:
        return [match.offer for match in self.matches]

    @property
    def best_offer(self) -> Optional[Offer]:
        return self.matches[0].offer if self.matches else None
