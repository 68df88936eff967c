"""
Catalog Data Source

Read-only accessors over the benefit catalog. Offer rows go through the
validating adapter before being handed out, and database failures are
reported as CatalogError.
"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Protocol

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, sessionmaker

from benefitscout.config import settings
from benefitscout.errors import CatalogError
from benefitscout.search.matcher import normalize_query, offer_matches
from benefitscout.search.offers import Offer
from .schema import (
    BenefitProgram, Institution, Offer as OfferRow, OfferCategory,
    UsageHistory, UserProgram,
)
from .validation import OfferRecordValidator


logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Read-only view of the offer catalog."""

    def get_featured_offers(self, limit: Optional[int] = None) -> List[Offer]:
        ...

    def get_all_programs(self) -> List[Dict[str, Any]]:
        ...

    def get_user_programs(self, user_id: str) -> List[Dict[str, Any]]:
        ...

    def get_offers_by_category(self, category_id: str) -> List[Offer]:
        ...

    def get_user_offers(self, user_id: str, search_term: Optional[str] = None) -> List[Offer]:
        ...

    def get_category(self, category_id: str) -> Optional[Dict[str, Any]]:
        ...

    def get_main_categories(self) -> List[Dict[str, Any]]:
        ...

    def get_sub_categories(self, parent_id: str) -> List[Dict[str, Any]]:
        ...

    def get_user_stats(self, user_id: str) -> Dict[str, Any]:
        ...


def offer_row_to_record(row: OfferRow) -> Dict[str, Any]:
    """Flatten an offer row and its relations into a catalog record."""
    program = row.program
    institution = program.institution if program else None
    return {
        "id": row.id,
        "title": row.title,
        "description": row.description,
        "offer_type": row.offer_type,
        "merchant_name": row.merchant.name if row.merchant else None,
        "program_name": program.name if program else None,
        "institution_name": (institution.brand_name or institution.name) if institution else None,
        "category_name": row.category.name if row.category else None,
        "cashback_percentage": row.cashback_percentage,
        "discount_percentage": row.discount_percentage,
        "points_multiplier": row.points_multiplier,
        "valid_until": row.valid_until,
        "priority_score": row.priority_score,
    }


def program_to_dict(program: BenefitProgram) -> Dict[str, Any]:
    """Serialize a program with its institution and type."""
    institution = program.institution
    return {
        "id": program.id,
        "name": program.name,
        "description": program.description,
        "requires_registration": program.requires_registration,
        "registration_url": program.registration_url,
        "terms_url": program.terms_url,
        "institution": {
            "id": institution.id,
            "name": institution.name,
            "brand_name": institution.brand_name,
            "type": institution.type,
        } if institution else None,
        "program_type": program.program_type.name if program.program_type else None,
    }


def category_to_dict(category: OfferCategory) -> Dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "parent_id": category.parent_id,
        "icon_name": category.icon_name,
    }


class SqlCatalogSource:
    """CatalogSource backed by the SQLAlchemy catalog schema."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            raise CatalogError(f"Catalog query failed: {e}") from e
        finally:
            session.close()

    def _active_offers_query(self, session: Session, today: date):
        return (
            session.query(OfferRow)
            .join(OfferRow.program)
            .join(BenefitProgram.institution)
            .options(
                joinedload(OfferRow.program).joinedload(BenefitProgram.institution),
                joinedload(OfferRow.merchant),
                joinedload(OfferRow.category),
            )
            .filter(OfferRow.is_active.is_(True))
            .filter(BenefitProgram.is_active.is_(True))
            .filter(Institution.is_active.is_(True))
            .filter(or_(OfferRow.valid_until.is_(None), OfferRow.valid_until >= today))
        )

    def _to_offers(self, rows: List[OfferRow]) -> List[Offer]:
        validator = OfferRecordValidator()
        return validator.validate_records(offer_row_to_record(row) for row in rows)

    def get_featured_offers(self, limit: Optional[int] = None) -> List[Offer]:
        """
        Get the featured catalog: active, unexpired offers by priority score.

        Args:
            limit: Maximum number of offers (defaults to settings.featured_offers_limit)

        Returns:
            Offers sorted by descending priority score

        Raises:
            CatalogError: If the database cannot be queried
        """
        if limit is None:
            limit = settings.featured_offers_limit

        with self._session() as session:
            rows = (
                self._active_offers_query(session, date.today())
                .order_by(OfferRow.priority_score.desc(), OfferRow.id)
                .limit(limit)
                .all()
            )
            return self._to_offers(rows)

    def get_offers_by_category(self, category_id: str) -> List[Offer]:
        """Get active, unexpired offers of a category by priority score."""
        with self._session() as session:
            rows = (
                self._active_offers_query(session, date.today())
                .filter(OfferRow.category_id == category_id)
                .order_by(OfferRow.priority_score.desc(), OfferRow.id)
                .all()
            )
            return self._to_offers(rows)

    def get_all_programs(self) -> List[Dict[str, Any]]:
        """Get all active programs ordered by name."""
        with self._session() as session:
            programs = (
                session.query(BenefitProgram)
                .options(joinedload(BenefitProgram.institution), joinedload(BenefitProgram.program_type))
                .filter(BenefitProgram.is_active.is_(True))
                .order_by(BenefitProgram.name)
                .all()
            )
            return [program_to_dict(program) for program in programs]

    def get_user_programs(self, user_id: str) -> List[Dict[str, Any]]:
        """Get a user's active programs, most recently added first."""
        with self._session() as session:
            memberships = (
                session.query(UserProgram)
                .options(
                    joinedload(UserProgram.program).joinedload(BenefitProgram.institution),
                    joinedload(UserProgram.program).joinedload(BenefitProgram.program_type),
                )
                .filter(UserProgram.user_id == user_id)
                .filter(UserProgram.is_active.is_(True))
                .order_by(UserProgram.added_at.desc())
                .all()
            )
            return [
                {
                    "id": membership.id,
                    "user_id": membership.user_id,
                    "nickname": membership.user_nickname,
                    "is_primary": membership.is_primary,
                    "added_at": membership.added_at,
                    "program": program_to_dict(membership.program),
                }
                for membership in memberships
            ]

    def get_category(self, category_id: str) -> Optional[Dict[str, Any]]:
        """Get one category, or None if it does not exist."""
        with self._session() as session:
            category = session.get(OfferCategory, category_id)
            return category_to_dict(category) if category else None

    def get_main_categories(self) -> List[Dict[str, Any]]:
        """Get top-level offer categories ordered by name."""
        with self._session() as session:
            categories = (
                session.query(OfferCategory)
                .filter(OfferCategory.parent_id.is_(None))
                .order_by(OfferCategory.name)
                .all()
            )
            return [category_to_dict(category) for category in categories]

    def get_sub_categories(self, parent_id: str) -> List[Dict[str, Any]]:
        """Get sub-categories of a category ordered by name."""
        with self._session() as session:
            categories = (
                session.query(OfferCategory)
                .filter(OfferCategory.parent_id == parent_id)
                .order_by(OfferCategory.name)
                .all()
            )
            return [category_to_dict(category) for category in categories]

    def _user_program_ids(self, session: Session, user_id: str) -> List[str]:
        return [
            program_id for (program_id,) in
            session.query(UserProgram.program_id)
            .filter(UserProgram.user_id == user_id)
            .filter(UserProgram.is_active.is_(True))
            .all()
        ]

    def get_user_offers(self, user_id: str, search_term: Optional[str] = None) -> List[Offer]:
        """
        Get active offers of the programs a user has joined.

        Args:
            user_id: User ID
            search_term: Optional text the offers must match (same fields
                and rules as the offer search)

        Returns:
            Offers sorted by descending priority score

        Raises:
            CatalogError: If the database cannot be queried
        """
        with self._session() as session:
            program_ids = self._user_program_ids(session, user_id)
            if not program_ids:
                return []

            rows = (
                self._active_offers_query(session, date.today())
                .filter(OfferRow.program_id.in_(program_ids))
                .order_by(OfferRow.priority_score.desc(), OfferRow.id)
                .all()
            )
            offers = self._to_offers(rows)

        normalized = normalize_query(search_term)
        if not normalized:
            return offers
        return [offer for offer in offers if offer_matches(offer, normalized)]

    def get_user_stats(self, user_id: str) -> Dict[str, Any]:
        """
        Get a user's benefit totals.

        Returns:
            Dictionary with total_points, total_cashback, active_programs
            and available_offers
        """
        with self._session() as session:
            totals = dict(
                session.query(UsageHistory.benefit_type, func.coalesce(func.sum(UsageHistory.benefit_earned), 0))
                .filter(UsageHistory.user_id == user_id)
                .group_by(UsageHistory.benefit_type)
                .all()
            )

            program_ids = self._user_program_ids(session, user_id)

            available_offers = 0
            if program_ids:
                available_offers = (
                    self._active_offers_query(session, date.today())
                    .filter(OfferRow.program_id.in_(program_ids))
                    .count()
                )

            return {
                "total_points": round(totals.get("points", 0)),
                "total_cashback": float(totals.get("cashback", 0)),
                "active_programs": len(program_ids),
                "available_offers": available_offers,
            }
