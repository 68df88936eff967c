"""
Pydantic Models for API Request/Response
"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field


# Request Models

class ExpiringBenefitIn(BaseModel):
    """A card benefit that is about to expire."""
    name: str
    expiry_date: str = Field(..., alias="expiryDate")
    value: str

    model_config = {"populate_by_name": True}


class CardIn(BaseModel):
    """Points and cashback balance of one card."""
    name: str
    points: float = 0
    cashback: float = 0
    category: Optional[str] = None
    expiring_benefits: List[ExpiringBenefitIn] = Field(default_factory=list, alias="expiringBenefits")

    model_config = {"populate_by_name": True}


class CategorySpendIn(BaseModel):
    """Spending in one category."""
    name: str
    amount: float
    percentage: float


class TransactionIn(BaseModel):
    """A recent purchase."""
    description: str
    amount: float
    date: str
    category: Optional[str] = None


class UserProfileRequest(BaseModel):
    """Request model for generating advisory insights (camelCase or snake_case keys)."""
    cards: List[CardIn] = Field(default_factory=list)
    total_points: float = Field(0, alias="totalPoints")
    total_cashback: float = Field(0, alias="totalCashback")
    monthly_spending: float = Field(0, alias="monthlySpending")
    categories: List[CategorySpendIn] = Field(default_factory=list)
    recent_transactions: List[TransactionIn] = Field(default_factory=list, alias="recentTransactions")

    model_config = {"populate_by_name": True}


# Response Models

class BenefitTagResponse(BaseModel):
    """Display tag of an offer's headline benefit."""
    label: str
    kind: str
    magnitude: float


class ExpiryResponse(BaseModel):
    """Expiry bucket of an offer."""
    bucket: str
    label: Optional[str] = None
    days_remaining: Optional[int] = None


class OfferItem(BaseModel):
    """Offer with its display tags."""
    offer_id: str
    title: str
    description: Optional[str] = None
    merchant_name: Optional[str] = None
    program_name: str
    institution_name: str
    category_name: Optional[str] = None
    offer_type: Optional[str] = None
    cashback_percentage: Optional[float] = None
    discount_percentage: Optional[float] = None
    points_multiplier: Optional[float] = None
    valid_until: Optional[date] = None
    priority_score: int
    benefit: BenefitTagResponse
    expiry: ExpiryResponse
    is_best_offer: bool = False


class SearchResponse(BaseModel):
    """Response model for an offer search."""
    query: str
    count: int
    is_fallback: bool
    results: List[OfferItem]


class OfferListResponse(BaseModel):
    """Response model for a plain list of offers."""
    count: int
    offers: List[OfferItem]


class InsightsModel(BaseModel):
    """Advisory text split into display sections."""
    opportunities: str = ""
    alerts: str = ""
    recommendations: str = ""
    tips: str = ""
    raw: str = ""


class InsightsResponse(BaseModel):
    """Successful insights response."""
    success: bool = True
    insights: InsightsModel
    timestamp: str


class InsightsErrorResponse(BaseModel):
    """Failed insights response."""
    success: bool = False
    error: str
    details: Optional[str] = None
