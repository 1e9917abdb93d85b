"""Tests for profile normalization and input validation."""

import pytest
from kigyo_risk_jp import (
    ApplicantProfile,
    AgeBracket,
    age_bracket,
    normalize_profile,
    validate_profile,
    DEFAULT_AGE,
)
from kigyo_risk_jp.profile import detect_children, estimate_children_count


def _profile(**kw) -> ApplicantProfile:
    base = dict(family_structure="独身", family_count=1, savings=0, monthly_income=300000)
    base.update(kw)
    return ApplicantProfile(**base)


class TestDetectChildren:
    def test_kanji_marker(self):
        assert detect_children("妻と子2人")

    def test_hiragana_marker(self):
        assert detect_children("夫とこども")

    def test_no_marker(self):
        assert not detect_children("独身")

    def test_flag_alone(self):
        assert detect_children("独身", flag=True)

    def test_false_flag_does_not_suppress_text(self):
        assert detect_children("子供あり", flag=False)


class TestEstimateChildrenCount:
    def test_first_digit_run(self):
        assert estimate_children_count("妻と子2人", 4) == 2

    def test_first_of_several_numbers(self):
        """子1人と犬3匹 → 最初の数字"""
        assert estimate_children_count("子1人と犬3匹", 5) == 1

    def test_multi_digit_run(self):
        assert estimate_children_count("子12人", 3) == 12

    def test_spouse_fallback(self):
        """数字なし・配偶者あり → 世帯人数 - 2"""
        assert estimate_children_count("妻と子供", 4) == 2

    def test_no_spouse_fallback(self):
        """数字なし・配偶者なし → 世帯人数 - 1"""
        assert estimate_children_count("子供", 3) == 2

    def test_fallback_minimum_one(self):
        assert estimate_children_count("配偶者と子", 2) == 1


class TestNormalizeProfile:
    def test_example_single(self):
        facts = normalize_profile(_profile())
        assert not facts.has_children
        assert facts.children_count == 0
        assert facts.effective_age == DEFAULT_AGE

    def test_example_children_text(self):
        facts = normalize_profile(_profile(family_structure="妻と子1人", family_count=3, age=32))
        assert facts.has_children
        assert facts.children_count == 1
        assert facts.effective_age == 32

    def test_digits_ignored_without_children(self):
        facts = normalize_profile(_profile(family_structure="夫婦2人", family_count=2))
        assert not facts.has_children
        assert facts.children_count == 0

    def test_flag_without_text_uses_fallback_count(self):
        facts = normalize_profile(_profile(family_structure="妻", family_count=4, has_children_flag=True))
        assert facts.has_children
        assert facts.children_count == 2


class TestFromForm:
    def test_zero_age_is_unspecified(self):
        p = ApplicantProfile.from_form("独身", 1, 0, 0, 300000)
        assert p.age is None

    def test_age_kept(self):
        p = ApplicantProfile.from_form("独身", 1, 42, 0, 300000, has_children=True)
        assert p.age == 42
        assert p.has_children_flag


class TestAgeBracket:
    @pytest.mark.parametrize("age,expected", [
        (18, AgeBracket.TWENTIES),
        (29, AgeBracket.TWENTIES),
        (30, AgeBracket.THIRTIES),
        (39, AgeBracket.THIRTIES),
        (40, AgeBracket.FORTIES),
        (50, AgeBracket.FIFTIES),
        (59, AgeBracket.FIFTIES),
        (60, AgeBracket.SIXTIES_PLUS),
        (100, AgeBracket.SIXTIES_PLUS),
    ])
    def test_boundaries(self, age, expected):
        assert age_bracket(age) is expected


class TestValidateProfile:
    def test_valid(self):
        assert validate_profile(_profile(age=35)) == []

    def test_unspecified_age_valid(self):
        assert validate_profile(_profile(age=None)) == []

    def test_empty_family_structure(self):
        errors = validate_profile(_profile(family_structure="  "))
        assert errors == ["家族構成を入力してください"]

    def test_family_count_zero(self):
        errors = validate_profile(_profile(family_count=0))
        assert any("1以上" in e for e in errors)

    def test_too_young(self):
        errors = validate_profile(_profile(age=17))
        assert any("18歳以上" in e for e in errors)

    def test_too_old(self):
        errors = validate_profile(_profile(age=101))
        assert errors == ["有効な年齢を入力してください"]

    def test_negative_savings(self):
        assert validate_profile(_profile(savings=-1)) == ["貯蓄額を入力してください"]

    def test_zero_income(self):
        assert validate_profile(_profile(monthly_income=0)) == ["月収を入力してください"]

    def test_multiple_errors(self):
        errors = validate_profile(_profile(family_structure="", family_count=0, monthly_income=0))
        assert len(errors) == 3
