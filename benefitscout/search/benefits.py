"""
Benefit Tag Formatting

Projects an offer's optional benefit fields into exactly one display tag.
Priority when several fields are set: cashback > discount > points.
"""

from typing import Union

from .offers import BenefitKind, BenefitTag, Offer


GENERIC_LABEL = "special benefit"


def format_number(value: Union[int, float]) -> str:
    """Render a number without a trailing '.0' (5.0 -> '5', 2.5 -> '2.5')."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_benefit(offer: Offer) -> BenefitTag:
    """
    Build the benefit tag for an offer.

    A field set to 0 is treated the same as a missing field.

    Args:
        offer: Offer to describe

    Returns:
        BenefitTag with label, kind and magnitude
    """
    if offer.cashback_percentage:
        return BenefitTag(
            label=f"{format_number(offer.cashback_percentage)}% cashback",
            kind=BenefitKind.CASHBACK,
            magnitude=offer.cashback_percentage,
        )

    if offer.discount_percentage:
        return BenefitTag(
            label=f"{format_number(offer.discount_percentage)}% discount",
            kind=BenefitKind.DISCOUNT,
            magnitude=offer.discount_percentage,
        )

    if offer.points_multiplier:
        return BenefitTag(
            label=f"{format_number(offer.points_multiplier)}x points",
            kind=BenefitKind.POINTS,
            magnitude=offer.points_multiplier,
        )

    return BenefitTag(label=GENERIC_LABEL, kind=BenefitKind.GENERIC, magnitude=0)
