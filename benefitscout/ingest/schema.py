"""
Database schema definitions for the BenefitScout catalog.
"""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime,
    ForeignKey, Text, Date
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Institution(Base):
    """Institution table - banks, card brands, retailers issuing programs."""
    __tablename__ = 'institutions'

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    brand_name = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    website_url = Column(String, nullable=True)
    type = Column(String, nullable=False)  # bank, card_brand, retailer, fuel_station, service
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    programs = relationship("BenefitProgram", back_populates="institution", cascade="all, delete-orphan")


class ProgramType(Base):
    """Program type table - cashback, points, miles..."""
    __tablename__ = 'program_types'

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    icon_name = Column(String, nullable=True)
    color = Column(String, nullable=True)


class BenefitProgram(Base):
    """Benefit program table - a loyalty/cashback program of an institution."""
    __tablename__ = 'benefit_programs'

    id = Column(String, primary_key=True)
    institution_id = Column(String, ForeignKey('institutions.id'), nullable=False)
    program_type_id = Column(String, ForeignKey('program_types.id'), nullable=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    terms_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    requires_registration = Column(Boolean, default=False, nullable=False)
    registration_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    institution = relationship("Institution", back_populates="programs")
    program_type = relationship("ProgramType")
    offers = relationship("Offer", back_populates="program", cascade="all, delete-orphan")


class OfferCategory(Base):
    """Offer category table - two-level hierarchy (parent_id is None for main categories)."""
    __tablename__ = 'offer_categories'

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    parent_id = Column(String, ForeignKey('offer_categories.id'), nullable=True)
    icon_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Merchant(Base):
    """Merchant table - stores where offers apply."""
    __tablename__ = 'merchants'

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    brand_name = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    website_url = Column(String, nullable=True)
    category_id = Column(String, ForeignKey('offer_categories.id'), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    category = relationship("OfferCategory")


class Offer(Base):
    """Offer table - benefit opportunities attached to a program."""
    __tablename__ = 'offers'

    id = Column(String, primary_key=True)
    program_id = Column(String, ForeignKey('benefit_programs.id'), nullable=False)
    merchant_id = Column(String, ForeignKey('merchants.id'), nullable=True)
    category_id = Column(String, ForeignKey('offer_categories.id'), nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    offer_type = Column(String, nullable=False)  # cashback, points, discount, bonus
    cashback_percentage = Column(Float, nullable=True)
    points_multiplier = Column(Float, nullable=True)
    discount_percentage = Column(Float, nullable=True)
    discount_fixed_amount = Column(Float, nullable=True)
    minimum_purchase = Column(Float, nullable=True)
    maximum_benefit = Column(Float, nullable=True)
    valid_from = Column(Date, nullable=True)
    valid_until = Column(Date, nullable=True)  # NULL = no expiry
    terms_and_conditions = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    priority_score = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    program = relationship("BenefitProgram", back_populates="offers")
    merchant = relationship("Merchant")
    category = relationship("OfferCategory")


class UserProgram(Base):
    """User program table - programs a user has joined."""
    __tablename__ = 'user_programs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False)
    program_id = Column(String, ForeignKey('benefit_programs.id'), nullable=False)
    user_card_number = Column(String, nullable=True)
    user_nickname = Column(String, nullable=True)
    is_primary = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_used_at = Column(DateTime, nullable=True)

    # Relationships
    program = relationship("BenefitProgram")


class UsageHistory(Base):
    """Usage history - benefits earned by users."""
    __tablename__ = 'usage_history'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False)
    offer_id = Column(String, ForeignKey('offers.id'), nullable=True)
    program_id = Column(String, ForeignKey('benefit_programs.id'), nullable=False)
    merchant_id = Column(String, ForeignKey('merchants.id'), nullable=True)
    purchase_amount = Column(Float, nullable=True)
    benefit_earned = Column(Float, nullable=True)
    benefit_type = Column(String, nullable=True)  # cashback, points
    used_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    notes = Column(Text, nullable=True)


class SearchLog(Base):
    """Search log - one row per offer search, for analytics."""
    __tablename__ = 'search_logs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=True)
    search_query = Column(String, nullable=False)
    results_count = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
