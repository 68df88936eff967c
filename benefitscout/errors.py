"""
Error Taxonomy

Closed set of error kinds raised at the collaborator boundaries.
"""

from typing import List, Optional


class BenefitScoutError(Exception):
    """Base class for all BenefitScout errors."""


class CatalogError(BenefitScoutError):
    """Offer catalog could not be read from the data source."""


class AnalyticsError(BenefitScoutError):
    """Search event could not be recorded."""


class GenerationError(BenefitScoutError):
    """Advisory text generation failed."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or message


class RecordValidationError(BenefitScoutError):
    """A raw catalog record could not be converted into an Offer."""

    def __init__(self, record_id: str, problems: List[str]):
        super().__init__(f"Offer record {record_id} is invalid: {'; '.join(problems)}")
        self.record_id = record_id
        self.problems = problems
