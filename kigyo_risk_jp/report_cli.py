"""CLI entry point for Markdown report generation."""

import argparse
import sys
from pathlib import Path

from kigyo_risk_jp.assessment import assess, assess_and_save
from kigyo_risk_jp.config import parse_args
from kigyo_risk_jp.report import build_report_context, render_report
from kigyo_risk_jp.store import JsonlAssessmentStore


def _add_report_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--name", type=str, default="",
        help="出力ファイル名のサフィックス（例: a → report-a.md）",
    )
    parser.add_argument(
        "--output", type=Path, default=Path("reports"),
        help="レポート出力ディレクトリ (default: reports)",
    )
    parser.add_argument(
        "--chart", action="store_true",
        help="チャートを生成してレポートに埋め込む",
    )
    parser.add_argument(
        "--chart-dir", type=Path, default=Path("reports/charts"),
        help="チャート出力ディレクトリ (default: reports/charts)",
    )


def main():
    r, profile, args = parse_args("起業リスク診断 レポート生成", _add_report_args)

    if r["store"]:
        result, _ = assess_and_save(profile, JsonlAssessmentStore(Path(r["store"])))
    else:
        result = assess(profile)

    chart_paths: list[Path] = []
    if args.chart:
        # matplotlib is only imported when charts are requested
        from kigyo_risk_jp.charts import plot_savings_targets, plot_score_breakdown

        print("チャート生成...", file=sys.stderr)
        chart_paths.append(plot_score_breakdown(result, args.chart_dir, name=args.name))
        chart_paths.append(plot_savings_targets(result, args.chart_dir, name=args.name))
        for p in chart_paths:
            print(f"  → {p}", file=sys.stderr)

    suffix = f"-{args.name}" if args.name else ""
    out_path = args.output / f"report{suffix}.md"
    ctx = build_report_context(result, name=args.name, chart_paths=chart_paths, report_dir=args.output)
    md = render_report(ctx)

    args.output.mkdir(parents=True, exist_ok=True)
    out_path.write_text(md, encoding="utf-8")
    print(f"  → {out_path}", file=sys.stderr)
    print("完了", file=sys.stderr)


if __name__ == "__main__":
    main()
