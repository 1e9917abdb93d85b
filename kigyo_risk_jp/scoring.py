"""Risk score calculation (0-100) and status mapping.

Score model (higher = lower economic risk of leaving employment):
  - Base: savings ÷ (monthly income × family count), 3 months of cost = 100
  - Floor 40 on the base; children lower it and re-floor at 65 - 5×children
  - Bonuses for age bracket, family type, income level and savings coverage
  - Households without children are floored at 80 after all bonuses
"""

import math
from dataclasses import dataclass
from enum import Enum

from kigyo_risk_jp.profile import AgeBracket, NormalizedFacts, age_bracket

SCORE_FLOOR = 40
SCORE_CAP = 100
NO_CHILDREN_FLOOR = 80
MAX_COUNTED_CHILDREN = 3
CHILD_PENALTY = 5
CHILDREN_FLOOR_BASE = 65

AGE_BONUS = {
    AgeBracket.TWENTIES: 15,      # 若さのボーナス
    AgeBracket.THIRTIES: 10,      # 経験と若さのバランス
    AgeBracket.FORTIES: 8,        # 経験と人脈
    AgeBracket.FIFTIES: 5,        # 知恵と経験
    AgeBracket.SIXTIES_PLUS: 3,   # セカンドライフ
}

FAMILY_BONUS_COUPLE = 5   # 子なし・家族あり
FAMILY_BONUS_SINGLE = 10  # 単身

# (月収下限(円), ボーナス) 降順
_INCOME_BONUS: list[tuple[int, int]] = [
    (500_000, 10),
    (300_000, 7),
    (200_000, 5),
]
_INCOME_BONUS_MIN = 3


class RiskStatus(Enum):
    CONSIDERING = "検討段階"
    READY = "準備OK"
    OPTIMAL = "絶好のタイミング"


@dataclass(frozen=True)
class ScoreBreakdown:
    base_ratio: float
    scaled: int             # 床・子供調整後のベーススコア
    age_bonus: int
    family_adjustment: int
    income_bonus: int
    savings_bonus: int
    raw_total: int          # 床・上限適用前の合計
    score: int

    @property
    def status(self) -> RiskStatus:
        return get_risk_status(self.score)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def calc_income_bonus(monthly_income: int) -> int:
    for threshold, bonus in _INCOME_BONUS:
        if monthly_income >= threshold:
            return bonus
    return _INCOME_BONUS_MIN


def calc_savings_bonus(savings: int, six_months_cost: int) -> int:
    """Bonus by coverage of six months of household cost."""
    if savings >= six_months_cost:
        return 10
    if savings * 2 >= six_months_cost:
        return 7
    if savings * 4 >= six_months_cost:
        return 5
    return 2


def score_breakdown(
    savings: int, monthly_income: int, family_count: int, facts: NormalizedFacts,
) -> ScoreBreakdown:
    """Compute the risk score with every intermediate term.

    monthly_income >= 1 and family_count >= 1 are caller preconditions.
    """
    base_ratio = savings / (monthly_income * family_count)
    scaled = min(_round_half_up(base_ratio * 100 / 3), SCORE_CAP)
    scaled = max(SCORE_FLOOR, scaled)

    age_bonus = AGE_BONUS[age_bracket(facts.effective_age)]

    if facts.has_children:
        counted = min(MAX_COUNTED_CHILDREN, facts.children_count)
        family_adjustment = -CHILD_PENALTY * counted
        min_with_children = CHILDREN_FLOOR_BASE - CHILD_PENALTY * counted
        scaled = max(min_with_children, scaled + family_adjustment)
    elif family_count > 1:
        family_adjustment = FAMILY_BONUS_COUPLE
    else:
        family_adjustment = FAMILY_BONUS_SINGLE

    income_bonus = calc_income_bonus(monthly_income)
    six_months_cost = monthly_income * family_count * 6
    savings_bonus = calc_savings_bonus(savings, six_months_cost)

    # family_adjustment is already folded into scaled when children exist;
    # it is added again here (observed behavior, kept as-is)
    raw_total = scaled + age_bonus + family_adjustment + income_bonus + savings_bonus
    final = raw_total
    if not facts.has_children:
        final = max(NO_CHILDREN_FLOOR, final)
    final = min(SCORE_CAP, final)

    return ScoreBreakdown(
        base_ratio=base_ratio,
        scaled=scaled,
        age_bonus=age_bonus,
        family_adjustment=family_adjustment,
        income_bonus=income_bonus,
        savings_bonus=savings_bonus,
        raw_total=raw_total,
        score=_round_half_up(final),
    )


def calculate_risk_score(
    savings: int, monthly_income: int, family_count: int, facts: NormalizedFacts,
) -> int:
    return score_breakdown(savings, monthly_income, family_count, facts).score


def get_risk_status(score: int) -> RiskStatus:
    if score <= 40:
        return RiskStatus.CONSIDERING
    if score <= 70:
        return RiskStatus.READY
    return RiskStatus.OPTIMAL
