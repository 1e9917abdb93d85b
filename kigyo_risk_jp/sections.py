"""Advice section model, parsing of the delimited document and display ordering.

Serialized format: each section is "【title】\\nbody", sections separated by a
blank line. Bodies never contain "【", so every marker opens a full section.
"""

import re
from dataclasses import dataclass
from enum import Enum


class SectionKind(Enum):
    FUNDING_GOAL = "funding_goal"
    AGE_ENCOURAGEMENT = "age_encouragement"
    INCOME = "income"
    FAMILY_CHILDREN = "family_children"
    FAMILY_HOUSEHOLD = "family_household"
    FAMILY_SINGLE = "family_single"
    LOW_SAVINGS = "low_savings"
    CAREER_RISK = "career_risk"
    ENCOURAGEMENT = "encouragement"
    ACTION_STEPS = "action_steps"
    OTHER = "other"


@dataclass(frozen=True)
class AdviceSection:
    kind: SectionKind
    title: str
    body: str

    def render(self) -> str:
        return f"【{self.title}】\n{self.body}"


# Display priority (smaller = earlier). Unlisted kinds sort last.
SECTION_PRIORITY: dict[SectionKind, int] = {
    SectionKind.ENCOURAGEMENT: 1,
    SectionKind.FUNDING_GOAL: 2,
    SectionKind.INCOME: 3,
    SectionKind.FAMILY_CHILDREN: 4,
    SectionKind.FAMILY_HOUSEHOLD: 4,
    SectionKind.FAMILY_SINGLE: 4,
    SectionKind.LOW_SAVINGS: 5,
    SectionKind.CAREER_RISK: 6,
    SectionKind.ACTION_STEPS: 7,
}
DEFAULT_PRIORITY = 99

# Title substring → kind, first match wins. Only used when re-reading text.
_TITLE_KINDS: list[tuple[str, SectionKind]] = [
    ("あなたへの特別", SectionKind.ENCOURAGEMENT),
    ("資金目標", SectionKind.FUNDING_GOAL),
    ("月収に応じた", SectionKind.INCOME),
    ("子育て世帯向け", SectionKind.FAMILY_CHILDREN),
    ("家族構成", SectionKind.FAMILY_HOUSEHOLD),
    ("単身者向け", SectionKind.FAMILY_SINGLE),
    ("貯蓄が少なくても", SectionKind.LOW_SAVINGS),
    ("サラリーマン", SectionKind.CAREER_RISK),
    ("具体的な行動", SectionKind.ACTION_STEPS),
    ("のあなたへ", SectionKind.AGE_ENCOURAGEMENT),
]

_MARKER = re.compile(r"【(.+?)】")


def kind_for_title(title: str) -> SectionKind:
    for key, kind in _TITLE_KINDS:
        if key in title:
            return kind
    return SectionKind.OTHER


def serialize_sections(sections: list[AdviceSection]) -> str:
    return "\n\n".join(s.render() for s in sections).strip()


def parse_advice(text: str) -> list[AdviceSection]:
    """Split a delimited advice document into sections (composition order).

    Text before the first marker and sections with an empty body are dropped.
    """
    markers = list(_MARKER.finditer(text))
    sections: list[AdviceSection] = []
    for i, m in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
        title = m.group(1).strip()
        body = text[m.end():end].strip()
        if not title or not body:
            continue
        sections.append(AdviceSection(kind=kind_for_title(title), title=title, body=body))
    return sections


def section_priority(section: AdviceSection) -> int:
    return SECTION_PRIORITY.get(section.kind, DEFAULT_PRIORITY)


def order_sections(sections: list[AdviceSection]) -> list[AdviceSection]:
    """Stable sort by display priority."""
    return sorted(sections, key=section_priority)


def ordered_advice(text: str) -> list[AdviceSection]:
    return order_sections(parse_advice(text))
