"""Chart generation for risk assessment results."""

import platform
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from kigyo_risk_jp.advice import months_to_target
from kigyo_risk_jp.assessment import Assessment
from kigyo_risk_jp.scoring import RiskStatus

# Status color mapping (progress bar colors)
STATUS_COLORS = {
    RiskStatus.CONSIDERING: "#f59e0b",  # amber
    RiskStatus.READY: "#10b981",        # emerald
    RiskStatus.OPTIMAL: "#3b82f6",      # blue
}

COLOR_POSITIVE = "#27ae60"
COLOR_NEGATIVE = "#c0392b"
COLOR_BASE = "#7f7f7f"


def _setup_japanese_font():
    """Configure matplotlib to use a Japanese font."""
    system = platform.system()
    if system == "Darwin":
        font_family = "Hiragino Sans"
    elif system == "Linux":
        font_family = "Noto Sans CJK JP"
    else:
        font_family = "sans-serif"
    plt.rcParams["font.family"] = font_family
    plt.rcParams["axes.unicode_minus"] = False


def _format_man_axis(ax: plt.Axes):
    """Show 円 amounts in 万円 on the X axis."""
    ax.xaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x / 10000:,.0f}万")
    )


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_score_breakdown(assessment: Assessment, output_path: Path, name: str = "") -> Path:
    """Generate a waterfall chart of score components.

    Args:
        assessment: result of assess().
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "a" → "score_breakdown-a.png").

    Returns:
        Path to the generated PNG file.
    """
    _setup_japanese_font()
    b = assessment.breakdown

    steps = [
        ("ベース", b.scaled),
        ("年齢", b.age_bonus),
        ("家族構成", b.family_adjustment),
        ("月収", b.income_bonus),
        ("貯蓄", b.savings_bonus),
    ]
    # Floor (no children → 80) and cap (100) as a final adjustment bar
    floor_cap = b.score - b.raw_total

    fig, ax = plt.subplots(figsize=(10, 6))
    running = 0
    for i, (label, value) in enumerate(steps):
        if i == 0:
            color = COLOR_BASE
            bottom = 0
        else:
            color = COLOR_POSITIVE if value >= 0 else COLOR_NEGATIVE
            bottom = running if value >= 0 else running + value
        ax.bar(label, abs(value), bottom=bottom, color=color, edgecolor="black", linewidth=0.5)
        ax.annotate(
            f"{value:+d}" if i else f"{value}",
            xy=(i, bottom + abs(value)), ha="center", va="bottom", fontsize=11,
        )
        running += value

    if floor_cap:
        color = COLOR_POSITIVE if floor_cap > 0 else COLOR_NEGATIVE
        bottom = running if floor_cap > 0 else running + floor_cap
        label = "下限80" if floor_cap > 0 else "上限100"
        ax.bar(label, abs(floor_cap), bottom=bottom, color=color, hatch="//", edgecolor="black", linewidth=0.5)
        ax.annotate(f"{floor_cap:+d}", xy=(len(steps), bottom + abs(floor_cap)), ha="center", va="bottom", fontsize=11)

    status_color = STATUS_COLORS[assessment.status]
    ax.bar("最終スコア", b.score, color=status_color, edgecolor="black", linewidth=0.5)
    ax.annotate(
        f"{b.score}（{assessment.status.value}）",
        xy=(len(steps) + (1 if floor_cap else 0), b.score),
        ha="center", va="bottom", fontsize=12, fontweight="bold", color=status_color,
    )

    for threshold in (40, 70):
        ax.axhline(threshold, color="#888888", linewidth=0.8, linestyle=":", zorder=0)
    ax.set_ylim(0, max(110, b.raw_total + 10))
    ax.set_ylabel("スコア")
    ax.set_title("リスクスコアの内訳")
    ax.grid(True, axis="y", alpha=0.3)

    return _save(fig, output_path, "score_breakdown", name)


def plot_savings_targets(assessment: Assessment, output_path: Path, name: str = "") -> Path:
    """Generate a horizontal bar chart of current savings vs. 3/6-month targets."""
    _setup_japanese_font()
    p = assessment.profile
    t = assessment.tiers

    labels = ["現在の貯蓄", "3ヶ月分（最低目標）", "6ヶ月分（理想）"]
    values = [p.savings, t.three_months_cost, t.six_months_cost]
    colors = [STATUS_COLORS[assessment.status], "#8da0cb", "#66c2a5"]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.barh(labels, values, color=colors, edgecolor="black", linewidth=0.5)
    ax.invert_yaxis()
    for i, v in enumerate(values):
        ax.annotate(f"{v:,}円", xy=(v, i), xytext=(4, 0), textcoords="offset points", va="center", fontsize=10)

    months = months_to_target(p.savings, t.three_months_cost, p.monthly_income)
    if months:
        note = f"3ヶ月分まで約{months}ヶ月（月収の20%を貯蓄）"
    else:
        note = "3ヶ月分の目標を達成済み"
    ax.set_title(f"貯蓄と生活防衛資金の目標（{note}）")
    ax.set_xlim(0, max(values) * 1.25 or 1)
    ax.grid(True, axis="x", alpha=0.3)
    _format_man_axis(ax)

    return _save(fig, output_path, "savings_targets", name)
