"""
BenefitScout

Finds the best loyalty/cashback offer for a purchase intent and turns
advisory text into display-ready insight sections.
"""

__version__ = "1.0.0"
