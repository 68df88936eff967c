"""
Advisory Prompt Templates

System instruction and user prompt sent to the text generation service.
The numbered list at the end of the prompt is what the parser splits on.
"""

from typing import List

from benefitscout.search.benefits import format_number
from .profile import UserProfile


SYSTEM_INSTRUCTION = (
    "You are an assistant specialized in optimizing credit card benefits and "
    "loyalty programs in Brazil. Your answers must be practical, specific and "
    "focused on saving money."
)

PROMPT_TEMPLATE = """
You are an expert in credit cards and benefit programs in Brazil.
Analyze the user's data and provide valuable insights.

User data:
- Total points: {total_points}
- Total cashback: {currency} {total_cashback}
- Monthly spending: {currency} {monthly_spending}

Cards:
{cards}

Spending categories:
{categories}

Recent transactions:
{transactions}

Please provide:
1. One specific, actionable saving opportunity
2. An alert about an expiring benefit (if any)
3. A smart recommendation based on the spending profile
4. A tip for optimizing the benefits

Keep the answers concise and practical. Use real values whenever possible.
"""


def _bullet_lines(lines: List[str]) -> str:
    if not lines:
        return "- (none)"
    return "\n".join(f"- {line}" for line in lines)


def build_insights_prompt(profile: UserProfile, currency: str = "R$", recent_limit: int = 5) -> str:
    """
    Render the advisory prompt for a user profile.

    Args:
        profile: User profile snapshot
        currency: Currency symbol used for amounts
        recent_limit: Maximum number of recent transactions to include

    Returns:
        Prompt text
    """
    cards = []
    for card in profile.cards:
        line = f"{card.name}: {format_number(card.points)} points, {currency} {format_number(card.cashback)} cashback"
        for benefit in card.expiring_benefits:
            line += f" (expiring: {benefit.name}, {benefit.value}, on {benefit.expiry_date})"
        cards.append(line)

    categories = [
        f"{cat.name}: {currency} {format_number(cat.amount)} ({format_number(cat.percentage)}%)"
        for cat in profile.categories
    ]

    transactions = [
        f"{txn.description}: {currency} {format_number(txn.amount)} on {txn.date}"
        for txn in profile.recent_transactions[:recent_limit]
    ]

    return PROMPT_TEMPLATE.format(
        total_points=format_number(profile.total_points),
        total_cashback=format_number(profile.total_cashback),
        monthly_spending=format_number(profile.monthly_spending),
        currency=currency,
        cards=_bullet_lines(cards),
        categories=_bullet_lines(categories),
        transactions=_bullet_lines(transactions),
    )
