"""Tests for the assessment pipeline and the persistence hand-off."""

import json
import logging

import pytest
from kigyo_risk_jp import (
    ApplicantProfile,
    AssessmentRecord,
    JsonlAssessmentStore,
    RiskStatus,
    SectionKind,
    assess,
    assess_and_save,
    save_assessment,
)


class _CountingStore:
    def __init__(self):
        self.records = []

    def save(self, record):
        self.records.append(record)


class _BrokenClientStore:
    def save(self, record):
        raise RuntimeError("connection reset")


class _FailingStore:
    def __init__(self):
        self.calls = 0

    def save(self, record):
        self.calls += 1
        raise OSError("disk full")


SINGLE = ApplicantProfile.from_form("独身", 1, 0, 0, 300000)
FAMILY = ApplicantProfile.from_form("妻と子1人", 3, 32, 1000000, 300000)


class TestAssess:
    def test_single_example(self):
        result = assess(SINGLE)
        assert result.score == 80
        assert result.status is RiskStatus.OPTIMAL
        assert len(result.sections) == 7
        assert result.sections[0].kind is SectionKind.ENCOURAGEMENT

    def test_family_example(self):
        result = assess(FAMILY)
        assert result.score == 74
        assert result.status.value == "絶好のタイミング"
        assert result.facts.children_count == 1
        assert result.sections[-1].title == "30代のあなたへ"

    def test_minimal_sections(self):
        result = assess(ApplicantProfile.from_form("独身", 1, 0, 900000, 300000))
        assert len(result.sections) == 6
        kinds = {s.kind for s in result.sections}
        assert SectionKind.LOW_SAVINGS not in kinds
        assert SectionKind.AGE_ENCOURAGEMENT not in kinds

    def test_sections_match_raw_advice(self):
        result = assess(FAMILY)
        assert sorted(s.title for s in result.sections) == sorted(
            line[1:-1] for line in result.raw_advice.splitlines() if line.startswith("【")
        )

    def test_idempotent(self):
        assert assess(FAMILY) == assess(FAMILY)


class TestToRecord:
    def test_fields(self):
        record = assess(FAMILY).to_record(created_at="2026-01-01T00:00:00+00:00")
        assert record.family_structure == "妻と子1人"
        assert record.family_count == 3
        assert record.savings == 1000000
        assert record.monthly_income == 300000
        assert record.risk_score == 74
        assert record.risk_status == "絶好のタイミング"
        assert record.advice.startswith("【資金目標】")
        assert record.created_at == "2026-01-01T00:00:00+00:00"

    def test_default_timestamp(self):
        record = assess(SINGLE).to_record()
        assert record.created_at.endswith("+00:00")


class TestSaveAssessment:
    def test_saved_once(self):
        store = _CountingStore()
        result, saved = assess_and_save(FAMILY, store)
        assert saved
        assert len(store.records) == 1
        assert store.records[0].risk_score == result.score

    def test_failure_contained(self, caplog):
        store = _FailingStore()
        with caplog.at_level(logging.ERROR, logger="kigyo_risk_jp.store"):
            result, saved = assess_and_save(FAMILY, store)
        assert not saved
        assert store.calls == 1
        assert result == assess(FAMILY)
        assert "保存に失敗" in caplog.text

    def test_non_io_error_contained(self, caplog):
        with caplog.at_level(logging.ERROR, logger="kigyo_risk_jp.store"):
            result, saved = assess_and_save(SINGLE, _BrokenClientStore())
        assert not saved
        assert result.score == 80
        assert result.sections
        assert "RuntimeError" in caplog.text

    def test_missing_store(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kigyo_risk_jp.store"):
            result, saved = assess_and_save(SINGLE, None)
        assert not saved
        assert result.score == 80
        assert "保存されません" in caplog.text

    def test_save_assessment_direct(self):
        store = _CountingStore()
        assert save_assessment(store, assess(SINGLE).to_record())


class TestJsonlAssessmentStore:
    def test_append_and_load(self, tmp_path):
        path = tmp_path / "data" / "assessments.jsonl"
        store = JsonlAssessmentStore(path)
        store.save(assess(SINGLE).to_record())
        store.save(assess(FAMILY).to_record())
        records = store.load()
        assert [r.risk_score for r in records] == [80, 74]
        assert all(isinstance(r, AssessmentRecord) for r in records)

    def test_utf8_json_lines(self, tmp_path):
        path = tmp_path / "a.jsonl"
        JsonlAssessmentStore(path).save(assess(SINGLE).to_record())
        text = path.read_text(encoding="utf-8")
        assert "独身" in text
        row = json.loads(text.splitlines()[0])
        assert row["risk_status"] == "絶好のタイミング"

    def test_load_missing(self, tmp_path):
        assert JsonlAssessmentStore(tmp_path / "none.jsonl").load() == []

    def test_unwritable_path_is_contained(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        store = JsonlAssessmentStore(blocker / "sub" / "a.jsonl")
        result, saved = assess_and_save(SINGLE, store)
        assert not saved
        assert result.score == 80
