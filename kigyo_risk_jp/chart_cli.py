"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from kigyo_risk_jp.assessment import assess
from kigyo_risk_jp.charts import plot_savings_targets, plot_score_breakdown
from kigyo_risk_jp.config import parse_args


def _add_chart_args(parser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="出力ディレクトリ (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="出力ファイル名のサフィックス（例: a → score_breakdown-a.png）",
    )


def main():
    _, profile, args = parse_args("起業リスク診断 チャート生成", _add_chart_args)
    result = assess(profile)

    print(f"スコア {result.score}/100（{result.status.value}）", file=sys.stderr)
    path = plot_score_breakdown(result, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)
    path = plot_savings_targets(result, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)
    print("完了", file=sys.stderr)


if __name__ == "__main__":
    main()
