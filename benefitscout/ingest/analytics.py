"""
Search Analytics

Records offer searches in the search_logs table.
"""

import logging
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from benefitscout.errors import AnalyticsError
from .schema import SearchLog


logger = logging.getLogger(__name__)


class AnalyticsSink(Protocol):
    """Destination for search events."""

    def log_search(self, user_id: Optional[str], query: str, result_count: int) -> None:
        ...


class SqlAnalyticsSink:
    """AnalyticsSink writing to the search_logs table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def log_search(self, user_id: Optional[str], query: str, result_count: int) -> None:
        """
        Insert one search event.

        Raises:
            AnalyticsError: If the row cannot be written
        """
        session = self.session_factory()
        try:
            session.add(SearchLog(user_id=user_id, search_query=query, results_count=result_count))
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise AnalyticsError(f"Could not record search: {e}") from e
        finally:
            session.close()
        logger.debug(f"Logged search '{query}' ({result_count} results) for user {user_id}")
