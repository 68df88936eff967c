"""
User Profile Data

Snapshot of a user's cards, spending and recent activity used to build
the advisory prompt.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ExpiringBenefit:
    """A card benefit that is about to expire."""
    name: str
    expiry_date: str
    value: str


@dataclass
class CardSummary:
    """Points and cashback balance of one card/program."""
    name: str
    points: float = 0
    cashback: float = 0
    category: Optional[str] = None
    expiring_benefits: List[ExpiringBenefit] = field(default_factory=list)


@dataclass
class CategorySpend:
    """Spending in one category."""
    name: str
    amount: float
    percentage: float


@dataclass
class RecentTransaction:
    """A recent purchase."""
    description: str
    amount: float
    date: str
    category: Optional[str] = None


@dataclass
class UserProfile:
    """Everything the advisory prompt needs about a user."""
    cards: List[CardSummary] = field(default_factory=list)
    total_points: float = 0
    total_cashback: float = 0
    monthly_spending: float = 0
    categories: List[CategorySpend] = field(default_factory=list)
    recent_transactions: List[RecentTransaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserProfile':
        """
        Build a profile from a plain dictionary (snake_case keys).

        Args:
            data: Profile dictionary, e.g. a dumped API request model

        Returns:
            UserProfile
        """
        cards = [
            CardSummary(
                name=card["name"],
                points=card.get("points") or 0,
                cashback=card.get("cashback") or 0,
                category=card.get("category"),
                expiring_benefits=[
                    ExpiringBenefit(**benefit) for benefit in card.get("expiring_benefits") or []
                ],
            )
            for card in data.get("cards") or []
        ]
        return cls(
            cards=cards,
            total_points=data.get("total_points") or 0,
            total_cashback=data.get("total_cashback") or 0,
            monthly_spending=data.get("monthly_spending") or 0,
            categories=[CategorySpend(**cat) for cat in data.get("categories") or []],
            recent_transactions=[
                RecentTransaction(**txn) for txn in data.get("recent_transactions") or []
            ],
        )
