"""
Offer record validation.

Converts loosely-typed catalog rows (dicts from the database or an
import file) into Offer entities. The search engine only ever receives
records that passed through here.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from benefitscout.errors import RecordValidationError
from benefitscout.search.offers import Offer


logger = logging.getLogger(__name__)

BENEFIT_FIELDS = ["cashback_percentage", "discount_percentage", "points_multiplier"]
VALID_OFFER_TYPES = {"cashback", "points", "discount", "bonus"}


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_number(value: Any, field_name: str, problems: List[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        problems.append(f"{field_name} must be a number, got {value!r}")
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        problems.append(f"{field_name} must be a number, got {value!r}")
        return None
    if number < 0:
        problems.append(f"{field_name} must be non-negative, got {number}")
        return None
    return number


def _parse_date(value: Any, problems: List[str]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")).date()
    except ValueError:
        problems.append(f"valid_until is not an ISO date: {value!r}")
        return None


def _parse_priority(value: Any, problems: List[str]) -> int:
    if value is None or value == "":
        return 0
    try:
        score = int(value)
    except (TypeError, ValueError):
        problems.append(f"priority_score must be an integer, got {value!r}")
        return 0
    if score < 0:
        problems.append(f"priority_score must be non-negative, got {score}")
    return score


def offer_from_record(record: Dict[str, Any]) -> Offer:
    """
    Convert a raw catalog record into an Offer.

    Accepts either `institution_name` or `institution_brand` for the
    institution.

    Args:
        record: Raw record (keys as in the offers view)

    Returns:
        Validated Offer

    Raises:
        RecordValidationError: If required fields are missing or malformed
    """
    problems: List[str] = []
    record_id = _clean_text(record.get("id"))

    if record_id is None:
        problems.append("missing id")

    title = _clean_text(record.get("title"))
    if title is None:
        problems.append("missing title")

    program_name = _clean_text(record.get("program_name"))
    if program_name is None:
        problems.append("missing program_name")

    institution_name = _clean_text(record.get("institution_name")) or _clean_text(record.get("institution_brand"))
    if institution_name is None:
        problems.append("missing institution_name")

    benefits = {name: _parse_number(record.get(name), name, problems) for name in BENEFIT_FIELDS}
    valid_until = _parse_date(record.get("valid_until"), problems)
    priority_score = _parse_priority(record.get("priority_score"), problems)

    offer_type = _clean_text(record.get("offer_type"))
    if offer_type is not None and offer_type not in VALID_OFFER_TYPES:
        problems.append(f"unknown offer_type {offer_type!r}")

    if problems:
        raise RecordValidationError(record_id or "UNKNOWN", problems)

    return Offer(
        id=record_id,
        title=title,
        program_name=program_name,
        institution_name=institution_name,
        description=_clean_text(record.get("description")),
        merchant_name=_clean_text(record.get("merchant_name")),
        category_name=_clean_text(record.get("category_name")),
        valid_until=valid_until,
        priority_score=priority_score,
        offer_type=offer_type,
        **benefits,
    )


class OfferRecordValidator:
    """Validate a batch of catalog records, keeping the good ones."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def validate_records(self, records: Iterable[Dict[str, Any]]) -> List[Offer]:
        """
        Convert records into offers, skipping (and recording) invalid ones.

        Args:
            records: Raw records in catalog order

        Returns:
            Valid offers, in the same order
        """
        offers = []
        seen_ids = set()

        for record in records:
            try:
                offer = offer_from_record(record)
            except RecordValidationError as e:
                self.errors.append(str(e))
                logger.warning(f"Skipping invalid offer record: {e}")
                continue

            if offer.id in seen_ids:
                self.warnings.append(f"Duplicate offer id {offer.id} skipped")
                continue
            seen_ids.add(offer.id)

            populated = [name for name in BENEFIT_FIELDS if getattr(offer, name)]
            if len(populated) > 1:
                self.warnings.append(
                    f"Offer {offer.id} has several benefit fields set: {', '.join(populated)}"
                )

            offers.append(offer)

        return offers

    def get_report(self) -> Tuple[List[str], List[str]]:
        """Return (errors, warnings) collected so far."""
        return self.errors, self.warnings
