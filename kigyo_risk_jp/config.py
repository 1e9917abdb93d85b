"""TOML config loader with CLI > config > default resolution."""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import Callable

from kigyo_risk_jp.profile import ApplicantProfile, validate_profile

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "family_structure": "独身",
    "family_count": 1,
    "age": 0,
    "savings": 0,
    "monthly_income": 300000,
    "has_children": False,
    "store": "",
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"設定ファイルの読み込みに失敗: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Normalize age: TOML false / "" → 0 (未入力)
    if "age" in raw and raw["age"] in (False, ""):
        raw["age"] = 0
    # Normalize amounts written as floats (e.g. 300000.0) → int 円
    for key in ("family_count", "age", "savings", "monthly_income"):
        if isinstance(raw.get(key), float):
            raw[key] = int(raw[key])
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared profile flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--family-structure", type=str, default=None, help=f"家族構成（例: 妻と子2人）(default: {d['family_structure']})")
    parser.add_argument("--family-count", type=int, default=None, help=f"本人を含む家族の人数 (default: {d['family_count']})")
    parser.add_argument("--age", type=int, default=None, help="年齢（18-100、0または省略で未入力）")
    parser.add_argument("--savings", type=int, default=None, help=f"貯蓄額・円 (default: {d['savings']})")
    parser.add_argument("--monthly-income", type=int, default=None, help=f"現在の月収・円 (default: {d['monthly_income']})")
    parser.add_argument("--has-children", action="store_true", default=None, help="子供あり（家族構成の記述からも自動判定）")
    parser.add_argument("--save", "--store", dest="store", type=str, default=None, help="診断結果の保存先（JSON Lines、省略で保存しない）")
    parser.add_argument("-v", "--verbose", action="store_true", help="詳細ログを出力")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_profile(r: dict) -> ApplicantProfile:
    """Build ApplicantProfile from resolved config dict (age 0 = 未入力)."""
    return ApplicantProfile.from_form(
        family_structure=str(r["family_structure"]),
        family_count=int(r["family_count"]),
        age=int(r["age"] or 0),
        savings=int(r["savings"]),
        monthly_income=int(r["monthly_income"]),
        has_children=bool(r["has_children"]),
    )


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[dict, ApplicantProfile, argparse.Namespace]:
    """Parse CLI args, load config, resolve values and validate the profile.

    Returns (resolved_dict, profile, namespace). Exits with status 1 when the
    profile fails validation.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    setup_logging(args.verbose)
    config = load_config(args.config)
    r = resolve(args, config)
    profile = build_profile(r)
    errors = validate_profile(profile)
    if errors:
        for e in errors:
            print(f"入力エラー: {e}", file=sys.stderr)
        raise SystemExit(1)
    return r, profile, args
