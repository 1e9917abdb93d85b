"""Income, savings and overall risk profile tiers for advice selection."""

from dataclasses import dataclass
from enum import Enum

from kigyo_risk_jp.profile import NormalizedFacts

INCOME_MEDIUM_FLOOR = 250_000  # 月収25万未満 = low
INCOME_HIGH_FLOOR = 500_000    # 月収50万以上 = high


class Level(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskProfile(Enum):
    HIGHEST = "highest"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ClassificationTiers:
    income_level: Level
    savings_level: Level
    risk_profile: RiskProfile
    three_months_cost: int
    six_months_cost: int


def income_level(monthly_income: int) -> Level:
    if monthly_income < INCOME_MEDIUM_FLOOR:
        return Level.LOW
    if monthly_income < INCOME_HIGH_FLOOR:
        return Level.MEDIUM
    return Level.HIGH


def savings_level(savings: int, target: int) -> Level:
    """Tier by savings ÷ target: <50% low, <100% medium, else high."""
    if savings * 2 < target:
        return Level.LOW
    if savings < target:
        return Level.MEDIUM
    return Level.HIGH


# Decision table evaluated top to bottom; first match wins.
# Each row: (has_children or None=any, predicate(savings_level, income_level), profile)
_RISK_PROFILE_RULES = [
    (True, lambda s, i: s is Level.LOW and i is Level.LOW, RiskProfile.HIGHEST),
    (True, lambda s, i: s is not Level.HIGH or i is not Level.HIGH, RiskProfile.HIGH),
    (False, lambda s, i: s is Level.LOW and i is Level.LOW, RiskProfile.MEDIUM),
    (None, lambda s, i: s is Level.HIGH and i is Level.HIGH, RiskProfile.LOW),
]


def risk_profile(has_children: bool, savings: Level, income: Level) -> RiskProfile:
    for children, matches, profile in _RISK_PROFILE_RULES:
        if children is not None and children != has_children:
            continue
        if matches(savings, income):
            return profile
    return RiskProfile.MEDIUM


def classify_profile(
    savings: int, monthly_income: int, family_count: int, facts: NormalizedFacts,
) -> ClassificationTiers:
    three_months_cost = monthly_income * family_count * 3
    inc = income_level(monthly_income)
    sav = savings_level(savings, three_months_cost)
    return ClassificationTiers(
        income_level=inc,
        savings_level=sav,
        risk_profile=risk_profile(facts.has_children, sav, inc),
        three_months_cost=three_months_cost,
        six_months_cost=three_months_cost * 2,
    )
