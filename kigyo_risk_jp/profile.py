"""Applicant profile, normalization and input validation."""

import re
from dataclasses import dataclass
from enum import Enum

# 子供の有無を判定するキーワード（いずれかを含めば子あり）
CHILD_MARKERS = ("子", "こども", "子供")
# 配偶者の有無を判定するキーワード（子の人数推定で世帯人数から差し引く）
SPOUSE_MARKERS = ("妻", "夫", "配偶者")

DEFAULT_AGE = 35  # 年齢未入力時のスコア計算用
MIN_AGE = 18
MAX_AGE = 100

_DIGIT_RUN = re.compile(r"[0-9]+")


class AgeBracket(Enum):
    TWENTIES = "20代"
    THIRTIES = "30代"
    FORTIES = "40代"
    FIFTIES = "50代"
    SIXTIES_PLUS = "60代以上"


# (上限年齢(未満), 区分)
_AGE_BRACKETS: list[tuple[int, AgeBracket]] = [
    (30, AgeBracket.TWENTIES),
    (40, AgeBracket.THIRTIES),
    (50, AgeBracket.FORTIES),
    (60, AgeBracket.FIFTIES),
]


def age_bracket(age: int) -> AgeBracket:
    """Return the age bracket (<30, <40, <50, <60, else)."""
    for threshold, bracket in _AGE_BRACKETS:
        if age < threshold:
            return bracket
    return AgeBracket.SIXTIES_PLUS


@dataclass(frozen=True)
class ApplicantProfile:
    family_structure: str        # 家族構成（自由入力、例: 妻と子2人）
    family_count: int            # 本人を含む世帯人数
    savings: int                 # 貯蓄額（円）
    monthly_income: int          # 月収（円）
    age: int | None = None       # None = 未入力
    has_children_flag: bool = False

    @classmethod
    def from_form(
        cls,
        family_structure: str,
        family_count: int,
        age: int,
        savings: int,
        monthly_income: int,
        has_children: bool = False,
    ) -> "ApplicantProfile":
        """Build from the form contract where age 0 means unspecified."""
        return cls(
            family_structure=family_structure,
            family_count=family_count,
            savings=savings,
            monthly_income=monthly_income,
            age=age or None,
            has_children_flag=has_children,
        )


@dataclass(frozen=True)
class NormalizedFacts:
    has_children: bool
    children_count: int
    effective_age: int


def detect_children(family_structure: str, flag: bool = False) -> bool:
    """Children present if flagged OR the text mentions a child marker."""
    text = family_structure.lower()
    return flag or any(marker in text for marker in CHILD_MARKERS)


def estimate_children_count(family_structure: str, family_count: int) -> int:
    """Estimate the number of children from free text.

    The first digit run in the text wins ("妻と子2人" → 2). Without digits,
    the household size minus the applicant (and spouse, if mentioned) is used,
    with a minimum of 1.
    """
    text = family_structure.lower()
    m = _DIGIT_RUN.search(text)
    if m:
        return int(m.group())
    adults = 2 if any(marker in text for marker in SPOUSE_MARKERS) else 1
    return max(1, family_count - adults)


def normalize_profile(profile: ApplicantProfile) -> NormalizedFacts:
    has_children = detect_children(profile.family_structure, profile.has_children_flag)
    children_count = 0
    if has_children:
        children_count = estimate_children_count(profile.family_structure, profile.family_count)
    effective_age = profile.age if profile.age else DEFAULT_AGE
    return NormalizedFacts(
        has_children=has_children,
        children_count=children_count,
        effective_age=effective_age,
    )


def validate_profile(profile: ApplicantProfile) -> list[str]:
    """Validate input preconditions. Returns list of error messages (empty = OK)."""
    errors: list[str] = []
    if not profile.family_structure.strip():
        errors.append("家族構成を入力してください")
    if profile.family_count < 1:
        errors.append("家族の人数を入力してください（1以上）")
    if profile.age is not None:
        if profile.age < MIN_AGE:
            errors.append(f"年齢を入力してください（{MIN_AGE}歳以上）")
        elif profile.age > MAX_AGE:
            errors.append("有効な年齢を入力してください")
    if profile.savings < 0:
        errors.append("貯蓄額を入力してください")
    if profile.monthly_income < 1:
        errors.append("月収を入力してください")
    return errors
