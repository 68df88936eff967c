"""
Shared test fixtures.
"""

from datetime import date

import pytest

from benefitscout.ingest.database import get_session_factory, init_database
from benefitscout.ingest.seed import seed_demo_catalog
from benefitscout.search.offers import Offer


@pytest.fixture
def make_offer():
    """Factory for Offer entities with sensible defaults."""
    def _make_offer(offer_id: str = "offer_1", **overrides) -> Offer:
        fields = {
            "id": offer_id,
            "title": f"Offer {offer_id}",
            "program_name": "Generic Rewards",
            "institution_name": "Generic Bank",
        }
        fields.update(overrides)
        return Offer(**fields)
    return _make_offer


@pytest.fixture
def session_factory(tmp_path):
    """Session factory bound to a fresh, empty SQLite database."""
    engine = init_database(db_path=tmp_path / "test.db")
    yield get_session_factory(engine)
    engine.dispose()


@pytest.fixture
def seeded_session_factory(session_factory):
    """Session factory whose database holds the demo catalog."""
    session = session_factory()
    try:
        seed_demo_catalog(session, today=date.today())
    finally:
        session.close()
    return session_factory
