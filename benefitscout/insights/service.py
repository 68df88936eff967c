"""
Insights Service

Builds the advisory prompt from a user profile, asks the generator for
text and parses it into an InsightRecord. No retries: a GenerationError
is passed to the caller, who may simply ask again.
"""

import itertools
import logging
import threading
from typing import Optional

from benefitscout.config import settings
from .generator import AdvisoryGenerator
from .parser import InsightRecord, parse_advisory_text
from .profile import UserProfile
from .prompts import SYSTEM_INSTRUCTION, build_insights_prompt


logger = logging.getLogger(__name__)


class InsightsService:
    """Generates structured insights for a user profile."""

    def __init__(
        self,
        generator: AdvisoryGenerator,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        currency: Optional[str] = None,
        recent_limit: Optional[int] = None,
        strict_parsing: bool = False
    ):
        self.generator = generator
        self.max_tokens = max_tokens if max_tokens is not None else settings.insights_max_tokens
        self.temperature = temperature if temperature is not None else settings.insights_temperature
        self.currency = currency or settings.currency_symbol
        self.recent_limit = recent_limit if recent_limit is not None else settings.recent_transactions_in_prompt
        self.strict_parsing = strict_parsing

    async def generate_insights(self, profile: UserProfile) -> InsightRecord:
        """
        Generate and parse insights.

        Args:
            profile: User profile snapshot

        Returns:
            InsightRecord

        Raises:
            GenerationError: If the generator fails
        """
        prompt = build_insights_prompt(profile, currency=self.currency, recent_limit=self.recent_limit)
        raw_text = await self.generator.generate(
            SYSTEM_INSTRUCTION,
            prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        record = parse_advisory_text(raw_text, strict=self.strict_parsing)

        found = sum(1 for value in (record.opportunities, record.alerts, record.recommendations, record.tips) if value)
        logger.info(f"Generated insights: {found}/4 sections recognized")
        return record


class InsightRequestTracker:
    """
    Last-response-wins bookkeeping for refreshable insight requests.

    Each request takes a sequence number; a response is accepted only if
    no newer request has been issued, so a stale response arriving late
    never replaces a fresher one.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._latest_issued = 0
        self.latest: Optional[InsightRecord] = None

    def next_sequence(self) -> int:
        """Issue the sequence number for a new request."""
        with self._lock:
            self._latest_issued = next(self._counter)
            return self._latest_issued

    def accept(self, sequence: int, record: InsightRecord) -> bool:
        """
        Store a response if it belongs to the most recent request.

        Args:
            sequence: Sequence number returned by next_sequence()
            record: Parsed insights for that request

        Returns:
            True if the record was stored, False if it was stale
        """
        with self._lock:
            if sequence != self._latest_issued:
                logger.debug(f"Discarding stale insights response {sequence} (latest is {self._latest_issued})")
                return False
            self.latest = record
            return True
