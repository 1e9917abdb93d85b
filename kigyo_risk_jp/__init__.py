"""Startup Risk Assessment Package (起業リスク診断)."""

from kigyo_risk_jp.profile import (
    ApplicantProfile,
    NormalizedFacts,
    AgeBracket,
    age_bracket,
    normalize_profile,
    validate_profile,
    DEFAULT_AGE,
)
from kigyo_risk_jp.scoring import (
    RiskStatus,
    ScoreBreakdown,
    calculate_risk_score,
    score_breakdown,
    get_risk_status,
)
from kigyo_risk_jp.classifier import (
    Level,
    RiskProfile,
    ClassificationTiers,
    classify_profile,
)
from kigyo_risk_jp.sections import (
    SectionKind,
    AdviceSection,
    parse_advice,
    order_sections,
    ordered_advice,
    section_priority,
)
from kigyo_risk_jp.advice import compose_sections, generate_advice
from kigyo_risk_jp.assessment import Assessment, assess, assess_and_save
from kigyo_risk_jp.store import AssessmentRecord, JsonlAssessmentStore, save_assessment

__all__ = [
    "ApplicantProfile",
    "NormalizedFacts",
    "AgeBracket",
    "age_bracket",
    "normalize_profile",
    "validate_profile",
    "DEFAULT_AGE",
    "RiskStatus",
    "ScoreBreakdown",
    "calculate_risk_score",
    "score_breakdown",
    "get_risk_status",
    "Level",
    "RiskProfile",
    "ClassificationTiers",
    "classify_profile",
    "SectionKind",
    "AdviceSection",
    "parse_advice",
    "order_sections",
    "ordered_advice",
    "section_priority",
    "compose_sections",
    "generate_advice",
    "Assessment",
    "assess",
    "assess_and_save",
    "AssessmentRecord",
    "JsonlAssessmentStore",
    "save_assessment",
]
