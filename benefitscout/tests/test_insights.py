"""
Unit Tests for Advisory Insights

Tests profile conversion, prompt building, generation and last-response-wins
bookkeeping.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from openai import OpenAIError

from benefitscout.errors import GenerationError
from benefitscout.insights import (
    SYSTEM_INSTRUCTION, CardSummary, ExpiringBenefit, InsightRecord,
    InsightRequestTracker, InsightsService, OpenAIAdvisoryGenerator,
    RecentTransaction, UserProfile, build_insights_prompt,
)


PROFILE_DATA = {
    "cards": [
        {
            "name": "Itaú Click",
            "points": 1200,
            "cashback": 35.5,
            "category": "credit",
            "expiring_benefits": [{"name": "Bonus points", "expiry_date": "2025-10-30", "value": "500 points"}],
        },
        {"name": "Nubank", "points": 0, "cashback": 12},
    ],
    "total_points": 1200,
    "total_cashback": 47.5,
    "monthly_spending": 3200,
    "categories": [{"name": "Supermarket", "amount": 900, "percentage": 28}],
    "recent_transactions": [
        {"description": f"Purchase {i}", "amount": 10 * i, "date": "2025-10-01", "category": "misc"}
        for i in range(1, 8)
    ],
}


class FakeGenerator:
    """Generator returning canned text and recording its calls."""

    def __init__(self, text: str = "1. Save\n2. Alert\n3. Rec\n4. Tip", error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, system_instruction, prompt, max_tokens, temperature):
        self.calls.append((system_instruction, prompt, max_tokens, temperature))
        if self.error:
            raise self.error
        return self.text


class TestUserProfile:
    """Test profile conversion."""

    def test_from_dict(self):
        profile = UserProfile.from_dict(PROFILE_DATA)
        assert len(profile.cards) == 2
        assert isinstance(profile.cards[0], CardSummary)
        assert profile.cards[0].expiring_benefits == [ExpiringBenefit("Bonus points", "2025-10-30", "500 points")]
        assert profile.cards[1].expiring_benefits == []
        assert profile.total_cashback == 47.5
        assert isinstance(profile.recent_transactions[0], RecentTransaction)

    def test_from_empty_dict(self):
        profile = UserProfile.from_dict({})
        assert profile.cards == []
        assert profile.monthly_spending == 0


class TestBuildPrompt:
    """Test prompt templating."""

    def test_contains_profile_values(self):
        prompt = build_insights_prompt(UserProfile.from_dict(PROFILE_DATA), currency="R$")
        assert "Total points: 1200" in prompt
        assert "Total cashback: R$ 47.5" in prompt
        assert "Itaú Click: 1200 points, R$ 35.5 cashback" in prompt
        assert "expiring: Bonus points" in prompt
        assert "Supermarket: R$ 900 (28%)" in prompt

    def test_limits_recent_transactions(self):
        prompt = build_insights_prompt(UserProfile.from_dict(PROFILE_DATA), recent_limit=5)
        assert "Purchase 5" in prompt
        assert "Purchase 6" not in prompt

    def test_asks_for_four_numbered_sections(self):
        prompt = build_insights_prompt(UserProfile())
        for marker in ["1.", "2.", "3.", "4."]:
            assert f"\n{marker} " in prompt
        assert "- (none)" in prompt


class TestInsightsService:
    """Test generation and parsing."""

    def test_generate_insights(self):
        generator = FakeGenerator()
        service = InsightsService(generator, max_tokens=300, temperature=0.2)

        record = asyncio.run(service.generate_insights(UserProfile.from_dict(PROFILE_DATA)))

        assert record == InsightRecord("Save", "Alert", "Rec", "Tip", generator.text)
        system, prompt, max_tokens, temperature = generator.calls[0]
        assert system == SYSTEM_INSTRUCTION
        assert "Itaú Click" in prompt
        assert (max_tokens, temperature) == (300, 0.2)

    def test_unstructured_text_still_returns_record(self):
        generator = FakeGenerator(text="No numbered sections at all.")
        record = asyncio.run(InsightsService(generator).generate_insights(UserProfile()))
        assert record.opportunities == ""
        assert record.raw == "No numbered sections at all."

    def test_generation_error_propagates_without_retry(self):
        generator = FakeGenerator(error=GenerationError("failed", "quota exceeded"))
        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(InsightsService(generator).generate_insights(UserProfile()))
        assert exc_info.value.details == "quota exceeded"
        assert len(generator.calls) == 1


class TestOpenAIAdvisoryGenerator:
    """Test the OpenAI-backed generator with a mocked client."""

    def _generator_with_client(self, create):
        generator = OpenAIAdvisoryGenerator(api_key="", model="gpt-4o-mini")
        generator._client = Mock()
        generator._client.chat.completions.create = create
        return generator

    def test_missing_api_key(self):
        generator = OpenAIAdvisoryGenerator(api_key="")
        with pytest.raises(GenerationError):
            asyncio.run(generator.generate("system", "prompt", 100, 0.5))

    def test_returns_message_content(self):
        completion = Mock()
        completion.choices = [Mock(message=Mock(content="1. Save"))]
        create = AsyncMock(return_value=completion)
        generator = self._generator_with_client(create)

        text = asyncio.run(generator.generate("system", "prompt", 100, 0.5))

        assert text == "1. Save"
        kwargs = create.call_args.kwargs
        assert kwargs["max_tokens"] == 100
        assert kwargs["temperature"] == 0.5
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_empty_content(self):
        completion = Mock()
        completion.choices = [Mock(message=Mock(content=None))]
        generator = self._generator_with_client(AsyncMock(return_value=completion))
        assert asyncio.run(generator.generate("s", "p", 10, 0.0)) == ""

    def test_no_choices(self):
        completion = Mock()
        completion.choices = []
        generator = self._generator_with_client(AsyncMock(return_value=completion))
        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(generator.generate("s", "p", 10, 0.0))
        assert exc_info.value.details == "empty completion"

    def test_api_error_becomes_generation_error(self):
        generator = self._generator_with_client(AsyncMock(side_effect=OpenAIError("rate limited")))
        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(generator.generate("s", "p", 10, 0.0))
        assert "rate limited" in exc_info.value.details


class TestInsightRequestTracker:
    """Test last-response-wins semantics."""

    def test_latest_response_is_kept(self):
        tracker = InsightRequestTracker()
        first = tracker.next_sequence()
        second = tracker.next_sequence()

        assert tracker.accept(second, InsightRecord(raw="fresh")) is True
        assert tracker.accept(first, InsightRecord(raw="stale")) is False
        assert tracker.latest.raw == "fresh"

    def test_sequences_increase(self):
        tracker = InsightRequestTracker()
        assert tracker.next_sequence() < tracker.next_sequence()

    def test_nothing_accepted_yet(self):
        assert InsightRequestTracker().latest is None
