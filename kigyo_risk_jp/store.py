"""Assessment persistence (optional, fire-and-forget).

Records are appended as JSON lines. A failed or missing store never changes
an already-computed assessment; save_assessment() logs and returns False.
"""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssessmentRecord:
    family_structure: str
    family_count: int
    savings: int
    monthly_income: int
    risk_score: int
    risk_status: str
    advice: str | None
    created_at: str

    @staticmethod
    def now() -> str:
        return datetime.now(timezone.utc).isoformat()


class AssessmentStore(Protocol):
    def save(self, record: AssessmentRecord) -> None: ...


class JsonlAssessmentStore:
    """Append-only JSON lines file."""

    def __init__(self, path: Path):
        self.path = path

    def save(self, record: AssessmentRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(asdict(record), ensure_ascii=False)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def load(self) -> list[AssessmentRecord]:
        if not self.path.exists():
            return []
        records = []
        with open(self.path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    records.append(AssessmentRecord(**json.loads(line)))
        return records


def save_assessment(store: AssessmentStore | None, record: AssessmentRecord) -> bool:
    """Hand a record to the store once. Returns True if it was saved."""
    if store is None:
        logger.warning("保存先が設定されていないため、診断データは保存されません")
        return False
    try:
        store.save(record)
    except Exception:
        logger.exception("診断データの保存に失敗しました")
        return False
    logger.info("診断データを保存しました（スコア%d）", record.risk_score)
    return True
