"""
Custom Exceptions for BenefitScout API
"""

from fastapi import HTTPException, status


class CategoryNotFoundError(HTTPException):
    """Offer category not found."""

    def __init__(self, category_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category {category_id} not found"
        )
