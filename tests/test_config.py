"""Tests for config loading, resolution and the CLI entry point."""

import argparse

import pytest
from kigyo_risk_jp.config import DEFAULTS, build_profile, create_parser, load_config, resolve


def _ns(**kw) -> argparse.Namespace:
    ns = argparse.Namespace(**{k: None for k in DEFAULTS})
    for k, v in kw.items():
        setattr(ns, k, v)
    return ns


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "config.toml") == {}

    def test_normalization(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            'family_structure = "妻と子2人"\nfamily_count = 4\nage = false\nsavings = 2000000.0\n',
            encoding="utf-8",
        )
        raw = load_config(path)
        assert raw["family_structure"] == "妻と子2人"
        assert raw["age"] == 0
        assert raw["savings"] == 2000000
        assert isinstance(raw["savings"], int)

    def test_unknown_keys_kept_as_is(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('family = "妻"\n', encoding="utf-8")
        raw = load_config(path)
        assert raw == {"family": "妻"}
        assert resolve(_ns(), raw)["family_structure"] == DEFAULTS["family_structure"]


class TestResolve:
    def test_defaults(self):
        assert resolve(_ns(), {}) == DEFAULTS

    def test_config_over_default(self):
        r = resolve(_ns(), {"savings": 500000})
        assert r["savings"] == 500000

    def test_cli_over_config(self):
        r = resolve(_ns(savings=100), {"savings": 500000})
        assert r["savings"] == 100

    def test_parser_flags_map_to_keys(self):
        args = create_parser("test").parse_args(
            ["--family-structure", "妻", "--family-count", "2", "--monthly-income", "400000", "--has-children"]
        )
        r = resolve(args, {})
        assert r["family_structure"] == "妻"
        assert r["family_count"] == 2
        assert r["monthly_income"] == 400000
        assert r["has_children"] is True
        assert r["age"] == 0


class TestBuildProfile:
    def test_age_zero_unspecified(self):
        p = build_profile(dict(DEFAULTS))
        assert p.age is None
        assert p.family_structure == "独身"

    def test_values(self):
        r = dict(DEFAULTS, age=44, savings=1000000, has_children=True)
        p = build_profile(r)
        assert p.age == 44
        assert p.savings == 1000000
        assert p.has_children_flag


class TestCliMain:
    def test_prints_assessment(self, tmp_path, monkeypatch, capsys):
        from kigyo_risk_jp import cli

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sys.argv", ["kigyo-risk", "--savings", "0", "--monthly-income", "300000"])
        cli.main()
        out = capsys.readouterr().out
        assert "リスクスコア: 80/100" in out
        assert out.index("あなたへの特別なメッセージ") < out.index("資金目標")

    def test_saves_when_store_given(self, tmp_path, monkeypatch, capsys):
        from kigyo_risk_jp import cli

        store = tmp_path / "out.jsonl"
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sys.argv", ["kigyo-risk", "--store", str(store)])
        cli.main()
        assert store.exists()
        assert "診断結果を保存しました" in capsys.readouterr().out

    def test_save_flag_appends_record(self, tmp_path, monkeypatch, capsys):
        from kigyo_risk_jp import JsonlAssessmentStore, cli

        store = tmp_path / "save.jsonl"
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sys.argv", ["kigyo-risk", "--save", str(store), "--savings", "0"])
        cli.main()
        records = JsonlAssessmentStore(store).load()
        assert [r.risk_score for r in records] == [80]
        assert "診断結果を保存しました" in capsys.readouterr().out

    def test_invalid_input_exits(self, tmp_path, monkeypatch, capsys):
        from kigyo_risk_jp import cli

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sys.argv", ["kigyo-risk", "--monthly-income", "0"])
        with pytest.raises(SystemExit):
            cli.main()
        assert "月収を入力してください" in capsys.readouterr().err
