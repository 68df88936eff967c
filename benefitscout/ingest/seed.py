"""
Demo catalog seeding.

Populates an empty database with a small, realistic catalog of
institutions, programs, merchants and offers.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from benefitscout.ingest.database import get_session, init_database
from benefitscout.ingest.schema import (
    BenefitProgram, Institution, Merchant, Offer, OfferCategory,
    ProgramType, UsageHistory, UserProgram,
)


logger = logging.getLogger(__name__)

DEMO_USER_ID = "user-123"


INSTITUTIONS = [
    ("inst_itau", "Itaú Unibanco", "Itaú", "bank"),
    ("inst_nubank", "Nu Pagamentos", "Nubank", "bank"),
    ("inst_livelo", "Livelo S.A.", "Livelo", "service"),
    ("inst_shell", "Raízen", "Shell Box", "fuel_station"),
]

PROGRAM_TYPES = [
    ("type_cashback", "Cashback"),
    ("type_points", "Points"),
]

PROGRAMS = [
    ("prog_itau_click", "inst_itau", "type_points", "Itaú Click Points"),
    ("prog_nubank_rewards", "inst_nubank", "type_points", "Nubank Rewards"),
    ("prog_livelo", "inst_livelo", "type_points", "Livelo"),
    ("prog_shell_box", "inst_shell", "type_cashback", "Shell Box Cashback"),
]

CATEGORIES = [
    # (id, name, parent_id)
    ("cat_food", "Food", None),
    ("cat_supermarket", "Supermarket", "cat_food"),
    ("cat_restaurants", "Restaurants", "cat_food"),
    ("cat_sports", "Sports", None),
    ("cat_fuel", "Fuel", None),
    ("cat_health", "Health", None),
]

MERCHANTS = [
    ("merch_pao", "Pão de Açúcar", "cat_supermarket"),
    ("merch_centauro", "Centauro", "cat_sports"),
    ("merch_nike", "Nike Store", "cat_sports"),
    ("merch_mcdonalds", "McDonald's", "cat_restaurants"),
    ("merch_shell", "Shell", "cat_fuel"),
    ("merch_drogasil", "Drogasil", "cat_health"),
]


def _offers(today: date):
    # (id, program, merchant, category, title, type, cashback, points, discount, valid_until, priority)
    return [
        ("offer_pao_cashback", "prog_itau_click", "merch_pao", "cat_supermarket",
         "5% back on groceries", "cashback", 5.0, None, None, today + timedelta(days=30), 95),
        ("offer_shell_fuel", "prog_shell_box", "merch_shell", "cat_fuel",
         "Cashback on every fill-up", "cashback", 3.0, None, None, None, 90),
        ("offer_livelo_nike", "prog_livelo", "merch_nike", "cat_sports",
         "Points multiplier at Nike", "points", None, 4.0, None, today + timedelta(days=5), 85),
        ("offer_centauro_discount", "prog_nubank_rewards", "merch_centauro", "cat_sports",
         "10% off sportswear", "discount", None, None, 10.0, today + timedelta(days=1), 80),
        ("offer_mcd_points", "prog_itau_click", "merch_mcdonalds", "cat_restaurants",
         "Double points on meals", "points", None, 2.0, None, today, 70),
        ("offer_drogasil_bonus", "prog_nubank_rewards", "merch_drogasil", "cat_health",
         "Pharmacy welcome bonus", "bonus", None, None, None, today + timedelta(days=60), 60),
    ]


def seed_demo_catalog(session: Session, today: Optional[date] = None, user_id: str = DEMO_USER_ID) -> int:
    """
    Insert the demo catalog.

    Args:
        session: Database session (committed on success)
        today: Reference date for offer expiry (defaults to today)
        user_id: User enrolled in the demo programs

    Returns:
        Number of offers created
    """
    today = today or date.today()

    for inst_id, name, brand, inst_type in INSTITUTIONS:
        session.add(Institution(id=inst_id, name=name, brand_name=brand, type=inst_type))

    for type_id, name in PROGRAM_TYPES:
        session.add(ProgramType(id=type_id, name=name))

    for prog_id, inst_id, type_id, name in PROGRAMS:
        session.add(BenefitProgram(id=prog_id, institution_id=inst_id, program_type_id=type_id, name=name))

    for cat_id, name, parent_id in CATEGORIES:
        session.add(OfferCategory(id=cat_id, name=name, parent_id=parent_id))

    for merch_id, name, cat_id in MERCHANTS:
        session.add(Merchant(id=merch_id, name=name, category_id=cat_id))

    session.flush()

    offers = _offers(today)
    for (offer_id, prog_id, merch_id, cat_id, title, offer_type,
         cashback, points, discount, valid_until, priority) in offers:
        session.add(Offer(
            id=offer_id,
            program_id=prog_id,
            merchant_id=merch_id,
            category_id=cat_id,
            title=title,
            offer_type=offer_type,
            cashback_percentage=cashback,
            points_multiplier=points,
            discount_percentage=discount,
            valid_from=today - timedelta(days=10),
            valid_until=valid_until,
            priority_score=priority,
        ))

    # Enroll the demo user in two programs with some earned benefits
    session.add(UserProgram(user_id=user_id, program_id="prog_itau_click", user_nickname="Itaú card", is_primary=True))
    session.add(UserProgram(user_id=user_id, program_id="prog_shell_box"))
    session.flush()
    session.add(UsageHistory(user_id=user_id, offer_id="offer_pao_cashback", program_id="prog_itau_click",
                             purchase_amount=400.0, benefit_earned=20.0, benefit_type="cashback"))
    session.add(UsageHistory(user_id=user_id, offer_id="offer_mcd_points", program_id="prog_itau_click",
                             purchase_amount=60.0, benefit_earned=120.0, benefit_type="points"))

    session.commit()
    logger.info(f"Seeded demo catalog with {len(offers)} offers")
    return len(offers)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    engine = init_database(drop_existing=True)
    session = get_session(engine)
    try:
        seed_demo_catalog(session)
    finally:
        session.close()
