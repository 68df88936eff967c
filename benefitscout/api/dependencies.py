"""
API Dependencies

Collaborators (catalog, analytics, generator) are created once per
process and injected into routes. Tests replace them through
app.dependency_overrides.
"""

from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from benefitscout.ingest.database import get_session_factory, init_database
from benefitscout.ingest.catalog import SqlCatalogSource
from benefitscout.ingest.analytics import SqlAnalyticsSink
from benefitscout.insights.generator import OpenAIAdvisoryGenerator


@lru_cache()
def get_session_factory_dependency() -> sessionmaker:
    """Create the schema (if needed) and return a session factory."""
    engine = init_database()
    return get_session_factory(engine)


def get_catalog_source() -> SqlCatalogSource:
    """Dependency to get the catalog source."""
    return SqlCatalogSource(get_session_factory_dependency())


def get_analytics_sink() -> SqlAnalyticsSink:
    """Dependency to get the search analytics sink."""
    return SqlAnalyticsSink(get_session_factory_dependency())


@lru_cache()
def get_advisory_generator() -> OpenAIAdvisoryGenerator:
    """Dependency to get the advisory text generator."""
    return OpenAIAdvisoryGenerator()
