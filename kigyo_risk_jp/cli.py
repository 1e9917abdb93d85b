"""CLI entry point for a single risk assessment."""

from pathlib import Path

from kigyo_risk_jp.advice import fmt_yen
from kigyo_risk_jp.assessment import Assessment, assess, assess_and_save
from kigyo_risk_jp.config import parse_args
from kigyo_risk_jp.report import SCORE_HELP, STATUS_DESCRIPTIONS, score_bar, section_icon
from kigyo_risk_jp.store import JsonlAssessmentStore


def _print_header(result: Assessment):
    p = result.profile
    f = result.facts
    age = f"{p.age}歳" if p.age else f"未入力（{f.effective_age}歳として評価）"
    children = f"あり（{f.children_count}人）" if f.has_children else "なし"
    print("=" * 80)
    print("起業リスク診断")
    print(f"  家族構成: {p.family_structure}（{p.family_count}人、子供{children}）")
    print(f"  年齢: {age}")
    print(f"  貯蓄額: {fmt_yen(p.savings)}円 / 月収: {fmt_yen(p.monthly_income)}円")
    print("=" * 80)
    print()


def _print_score(result: Assessment):
    b = result.breakdown
    status = result.status
    print("【診断結果】")
    print(f"  リスクスコア: {result.score}/100  {score_bar(result.score)}  {status.value}")
    print(f"  {STATUS_DESCRIPTIONS[status]}")
    print(f"  ※{SCORE_HELP}")
    print("-" * 80)
    print(f"  {'ベース':<10} {b.scaled:>4}")
    print(f"  {'年齢':<10} {b.age_bonus:>+4}")
    print(f"  {'家族構成':<10} {b.family_adjustment:>+4}")
    print(f"  {'月収':<10} {b.income_bonus:>+4}")
    print(f"  {'貯蓄':<10} {b.savings_bonus:>+4}")
    print(f"  {'合計':<10} {b.raw_total:>4} → {b.score}（下限・上限適用後）")
    print("-" * 80)


def _print_advice(result: Assessment):
    print("\n【次のステップに向けたアドバイス】")
    for i, section in enumerate(result.sections):
        print()
        print(f"{section_icon(section, i)} {section.title}")
        for line in section.body.splitlines():
            print(f"    {line}" if line else "")


def main():
    """Execute a single assessment and print score and ordered advice."""
    r, profile, _ = parse_args("起業リスク診断")

    store_path = r["store"]
    if store_path:
        result, saved = assess_and_save(profile, JsonlAssessmentStore(Path(store_path)))
    else:
        result, saved = assess(profile), False

    _print_header(result)
    _print_score(result)
    _print_advice(result)
    if saved:
        print(f"\n  → 診断結果を保存しました: {store_path}")


if __name__ == "__main__":
    main()
