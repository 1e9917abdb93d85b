"""Markdown report for a risk assessment.

Score with its breakdown, funding tiers, and the advice sections in display
order, with optional links to the generated charts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from kigyo_risk_jp.advice import fmt_yen, months_to_target
from kigyo_risk_jp.assessment import Assessment
from kigyo_risk_jp.classifier import Level, RiskProfile
from kigyo_risk_jp.scoring import RiskStatus
from kigyo_risk_jp.sections import AdviceSection, SectionKind

STATUS_DESCRIPTIONS = {
    RiskStatus.CONSIDERING: "起業に向けて準備を始めるタイミングです。副業から始めて、徐々にステップアップしていきましょう。",
    RiskStatus.READY: "起業の準備が整いつつあります。計画を具体化して、行動に移すタイミングです。",
    RiskStatus.OPTIMAL: "起業に最適なタイミングです！あなたの情熱とアイデアを形にするチャンスです。",
}

STATUS_ICONS = {
    RiskStatus.CONSIDERING: "⚠️",
    RiskStatus.READY: "✅",
    RiskStatus.OPTIMAL: "🚀",
}

SECTION_ICONS = {
    SectionKind.FUNDING_GOAL: "💴",
    SectionKind.AGE_ENCOURAGEMENT: "💡",
    SectionKind.INCOME: "📊",
    SectionKind.FAMILY_CHILDREN: "❤️",
    SectionKind.FAMILY_HOUSEHOLD: "❤️",
    SectionKind.FAMILY_SINGLE: "❤️",
    SectionKind.LOW_SAVINGS: "💡",
    SectionKind.CAREER_RISK: "💼",
    SectionKind.ENCOURAGEMENT: "💬",
    SectionKind.ACTION_STEPS: "📝",
}
DEFAULT_ICONS = ["ℹ️", "📈", "📝"]

_LEVEL_LABELS = {Level.LOW: "低", Level.MEDIUM: "中", Level.HIGH: "高"}
_RISK_LABELS = {
    RiskProfile.HIGHEST: "最高",
    RiskProfile.HIGH: "高",
    RiskProfile.MEDIUM: "中",
    RiskProfile.LOW: "低",
}

SCORE_HELP = "スコアが高いほど経済的なリスクが低く、安心して起業に踏み出せる状態です"


def section_icon(section: AdviceSection, index: int = 0) -> str:
    icon = SECTION_ICONS.get(section.kind)
    if icon is None:
        return DEFAULT_ICONS[index % len(DEFAULT_ICONS)]
    return icon


def score_bar(score: int, width: int = 20) -> str:
    """Text progress bar: 74 → "███████████████░░░░░" """
    filled = round(score / 100 * width)
    return "█" * filled + "░" * (width - filled)


# ---------------------------------------------------------------------------
# ReportContext
# ---------------------------------------------------------------------------

@dataclass
class ReportContext:
    assessment: Assessment
    name: str = ""
    chart_paths: list[Path] = field(default_factory=list)
    report_dir: Path | None = None


def build_report_context(
    assessment: Assessment,
    name: str = "",
    chart_paths: list[Path] | None = None,
    report_dir: Path | None = None,
) -> ReportContext:
    return ReportContext(
        assessment=assessment,
        name=name,
        chart_paths=list(chart_paths or []),
        report_dir=report_dir,
    )


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def _render_title(ctx: ReportContext) -> str:
    suffix = f"（{ctx.name}）" if ctx.name else ""
    return f"## 起業リスク診断結果{suffix}\n\n---"


def _render_profile(ctx: ReportContext) -> str:
    a = ctx.assessment
    p = a.profile
    age = f"{p.age}歳" if p.age else f"未入力（スコア計算は{a.facts.effective_age}歳として評価）"
    children = f"あり（{a.facts.children_count}人と推定）" if a.facts.has_children else "なし"
    lines = [
        "\n### 入力内容\n",
        "| 項目 | 値 |",
        "|------|-----|",
        f"| 家族構成 | {p.family_structure} |",
        f"| 家族の人数 | {p.family_count}人 |",
        f"| 子供 | {children} |",
        f"| 年齢 | {age} |",
        f"| 貯蓄額 | {fmt_yen(p.savings)}円 |",
        f"| 月収 | {fmt_yen(p.monthly_income)}円 |",
    ]
    return "\n".join(lines)


def _render_score(ctx: ReportContext) -> str:
    a = ctx.assessment
    b = a.breakdown
    status = a.status
    lines = [
        "\n### リスクスコア\n",
        f"**{a.score}/100** `{score_bar(a.score)}` {STATUS_ICONS[status]} **{status.value}**\n",
        f"> {STATUS_DESCRIPTIONS[status]}\n",
        f"※ {SCORE_HELP}\n",
        "| 内訳 | 点 |",
        "|------|----:|",
        f"| ベーススコア（貯蓄÷生活費、子供調整後） | {b.scaled} |",
        f"| 年齢ボーナス | {b.age_bonus:+d} |",
        f"| 家族構成 | {b.family_adjustment:+d} |",
        f"| 月収ボーナス | {b.income_bonus:+d} |",
        f"| 貯蓄ボーナス | {b.savings_bonus:+d} |",
        f"| 合計（下限・上限適用前） | {b.raw_total} |",
        f"| **最終スコア** | **{b.score}** |",
    ]
    return "\n".join(lines)


def _render_tiers(ctx: ReportContext) -> str:
    a = ctx.assessment
    t = a.tiers
    p = a.profile
    months = months_to_target(p.savings, t.three_months_cost, p.monthly_income)
    progress = "達成済み" if months == 0 else f"約{months}ヶ月（月収の20%を貯蓄）"
    lines = [
        "\n### 資金状況\n",
        "| 指標 | 値 |",
        "|------|-----|",
        f"| 3ヶ月分の生活費 | {fmt_yen(t.three_months_cost)}円 |",
        f"| 6ヶ月分の生活費 | {fmt_yen(t.six_months_cost)}円 |",
        f"| 3ヶ月分までの期間 | {progress} |",
        f"| 月収レベル | {_LEVEL_LABELS[t.income_level]} |",
        f"| 貯蓄レベル | {_LEVEL_LABELS[t.savings_level]} |",
        f"| 総合リスク | {_RISK_LABELS[t.risk_profile]} |",
    ]
    return "\n".join(lines)


def _render_section(section: AdviceSection, index: int) -> str:
    icon = section_icon(section, index)
    if section.kind is SectionKind.ENCOURAGEMENT:
        quoted = "\n".join(f"> {line}" if line else ">" for line in section.body.splitlines())
        return f"#### {icon} {section.title}\n\n{quoted}\n"
    # Markdown line breaks inside a section
    body = "  \n".join(section.body.splitlines())
    return f"#### {icon} {section.title}\n\n{body}\n"


def _render_advice(ctx: ReportContext) -> str:
    parts = ["\n### 次のステップに向けたアドバイス\n"]
    for i, section in enumerate(ctx.assessment.sections):
        parts.append(_render_section(section, i))
    return "\n".join(parts)


def _render_charts(ctx: ReportContext) -> str:
    if not ctx.chart_paths:
        return ""
    lines = ["\n### チャート\n"]
    for path in ctx.chart_paths:
        rel = path
        if ctx.report_dir is not None:
            try:
                rel = path.relative_to(ctx.report_dir)
            except ValueError:
                pass
        lines.append(f"![{path.stem}]({rel.as_posix()})\n")
    return "\n".join(lines)


def render_report(ctx: ReportContext) -> str:
    """Render a complete Markdown report from a ReportContext."""
    sections = [
        _render_title(ctx),
        _render_profile(ctx),
        _render_score(ctx),
        _render_tiers(ctx),
        _render_advice(ctx),
        _render_charts(ctx),
    ]
    return "\n".join(s for s in sections if s)
