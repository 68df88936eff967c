"""
Advisory Insights

Prompt building, text generation and parsing into display sections.
"""

from .parser import InsightRecord, parse_advisory_text, extract_section
from .profile import UserProfile, CardSummary, CategorySpend, RecentTransaction, ExpiringBenefit
from .prompts import SYSTEM_INSTRUCTION, build_insights_prompt
from .generator import AdvisoryGenerator, OpenAIAdvisoryGenerator
from .service import InsightsService, InsightRequestTracker

__all__ = [
    'InsightRecord',
    'parse_advisory_text',
    'extract_section',
    'UserProfile',
    'CardSummary',
    'CategorySpend',
    'RecentTransaction',
    'ExpiringBenefit',
    'SYSTEM_INSTRUCTION',
    'build_insights_prompt',
    'AdvisoryGenerator',
    'OpenAIAdvisoryGenerator',
    'InsightsService',
    'InsightRequestTracker',
]
