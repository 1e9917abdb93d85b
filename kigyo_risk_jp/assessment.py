"""Assessment pipeline: profile → score + ordered advice."""

from dataclasses import dataclass

from kigyo_risk_jp.advice import generate_advice
from kigyo_risk_jp.classifier import ClassificationTiers, classify_profile
from kigyo_risk_jp.profile import ApplicantProfile, NormalizedFacts, normalize_profile
from kigyo_risk_jp.scoring import RiskStatus, ScoreBreakdown, score_breakdown
from kigyo_risk_jp.sections import AdviceSection, ordered_advice
from kigyo_risk_jp.store import AssessmentRecord, AssessmentStore, save_assessment


@dataclass(frozen=True)
class Assessment:
    profile: ApplicantProfile
    facts: NormalizedFacts
    breakdown: ScoreBreakdown
    tiers: ClassificationTiers
    raw_advice: str
    sections: list[AdviceSection]  # display order

    @property
    def score(self) -> int:
        return self.breakdown.score

    @property
    def status(self) -> RiskStatus:
        return self.breakdown.status

    def to_record(self, created_at: str | None = None) -> AssessmentRecord:
        p = self.profile
        return AssessmentRecord(
            family_structure=p.family_structure,
            family_count=p.family_count,
            savings=p.savings,
            monthly_income=p.monthly_income,
            risk_score=self.score,
            risk_status=self.status.value,
            advice=self.raw_advice or None,
            created_at=created_at or AssessmentRecord.now(),
        )


def assess(profile: ApplicantProfile) -> Assessment:
    """Run the full pipeline. Inputs must already pass validate_profile()."""
    facts = normalize_profile(profile)
    breakdown = score_breakdown(
        profile.savings, profile.monthly_income, profile.family_count, facts,
    )
    tiers = classify_profile(
        profile.savings, profile.monthly_income, profile.family_count, facts,
    )
    raw_advice = generate_advice(profile, facts, tiers)
    return Assessment(
        profile=profile,
        facts=facts,
        breakdown=breakdown,
        tiers=tiers,
        raw_advice=raw_advice,
        sections=ordered_advice(raw_advice),
    )


def assess_and_save(
    profile: ApplicantProfile, store: AssessmentStore | None,
) -> tuple[Assessment, bool]:
    """Assess, then hand the result to the store once (failures are contained)."""
    result = assess(profile)
    saved = save_assessment(store, result.to_record())
    return result, saved
