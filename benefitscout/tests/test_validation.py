"""
Unit Tests for Offer Record Validation
"""

from datetime import date, datetime

import pytest

from benefitscout.errors import RecordValidationError
from benefitscout.ingest.validation import OfferRecordValidator, offer_from_record


def make_record(**overrides):
    record = {
        "id": "offer_1",
        "title": "5% back on groceries",
        "description": "Valid at all stores",
        "merchant_name": "Pão de Açúcar",
        "program_name": "Itaú Click",
        "institution_brand": "Itaú",
        "category_name": "Supermarket",
        "cashback_percentage": 5,
        "discount_percentage": None,
        "points_multiplier": None,
        "valid_until": "2025-12-31",
        "priority_score": 90,
        "offer_type": "cashback",
    }
    record.update(overrides)
    return record


class TestOfferFromRecord:
    """Test single-record conversion."""

    def test_valid_record(self):
        offer = offer_from_record(make_record())
        assert offer.id == "offer_1"
        assert offer.institution_name == "Itaú"
        assert offer.cashback_percentage == 5.0
        assert offer.valid_until == date(2025, 12, 31)
        assert offer.priority_score == 90

    def test_institution_name_preferred_over_brand(self):
        offer = offer_from_record(make_record(institution_name="Itaú Unibanco"))
        assert offer.institution_name == "Itaú Unibanco"

    def test_optional_fields_may_be_missing(self):
        offer = offer_from_record({
            "id": 7, "title": "Deal", "program_name": "P", "institution_name": "I",
        })
        assert offer.id == "7"
        assert offer.merchant_name is None
        assert offer.valid_until is None
        assert offer.priority_score == 0

    def test_date_and_datetime_values(self):
        assert offer_from_record(make_record(valid_until=date(2025, 1, 2))).valid_until == date(2025, 1, 2)
        assert offer_from_record(make_record(valid_until=datetime(2025, 1, 2, 15, 0))).valid_until == date(2025, 1, 2)

    def test_blank_strings_become_none(self):
        offer = offer_from_record(make_record(merchant_name="   ", category_name=""))
        assert offer.merchant_name is None
        assert offer.category_name is None

    @pytest.mark.parametrize("overrides, problem", [
        ({"title": None}, "missing title"),
        ({"program_name": ""}, "missing program_name"),
        ({"institution_brand": None}, "missing institution_name"),
        ({"cashback_percentage": -1}, "cashback_percentage must be non-negative"),
        ({"points_multiplier": "lots"}, "points_multiplier must be a number"),
        ({"valid_until": "next week"}, "valid_until is not an ISO date"),
        ({"priority_score": -5}, "priority_score must be non-negative"),
        ({"offer_type": "lottery"}, "unknown offer_type"),
    ])
    def test_invalid_records(self, overrides, problem):
        with pytest.raises(RecordValidationError) as exc_info:
            offer_from_record(make_record(**overrides))
        assert any(problem in p for p in exc_info.value.problems)

    def test_missing_id(self):
        with pytest.raises(RecordValidationError) as exc_info:
            offer_from_record(make_record(id=None))
        assert exc_info.value.record_id == "UNKNOWN"


class TestOfferRecordValidator:
    """Test batch validation."""

    def test_skips_invalid_and_keeps_order(self):
        validator = OfferRecordValidator()
        offers = validator.validate_records([
            make_record(id="a"),
            make_record(id="b", title=None),
            make_record(id="c"),
        ])
        errors, warnings = validator.get_report()

        assert [o.id for o in offers] == ["a", "c"]
        assert len(errors) == 1
        assert "b" in errors[0]

    def test_duplicate_ids(self):
        validator = OfferRecordValidator()
        offers = validator.validate_records([make_record(id="a"), make_record(id="a", title="Other")])
        assert len(offers) == 1
        assert offers[0].title == "5% back on groceries"
        assert validator.warnings

    def test_warns_on_several_benefits(self):
        validator = OfferRecordValidator()
        validator.validate_records([make_record(discount_percentage=10)])
        assert any("several benefit fields" in w for w in validator.warnings)
