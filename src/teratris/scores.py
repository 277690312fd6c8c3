"""Ranked high-score list with pluggable storage.

Records are kept as JSON text, highest score first and capped at ten entries.
Storage that is missing or holds anything other than a list of records reads
back as an empty table.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol


LOGGER = logging.getLogger(__name__)

DEFAULT_NAME = "Player"
STORAGE_KEY = "tera_highscores_v1"


@dataclass(frozen=True)
class HighScoreRecord:
    name: str
    score: int
    date: str


class ScoreStorage(Protocol):
    """Somewhere to keep the serialised table."""

    def read(self) -> Optional[str]: ...

    def write(self, text: str) -> None: ...


class MemoryStorage:
    """Keeps the table in memory; useful for tests and throwaway sessions."""

    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        self.text = text


class JsonFileStorage:
    """Keeps the table in a JSON file on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")


def _parse_records(raw: str) -> List[HighScoreRecord]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("High score data must be a list")
    records = []
    for item in data:
        score = item["score"]
        if isinstance(score, float) and not math.isfinite(score):
            raise ValueError(f"Score is not a finite number: {score}")
        records.append(
            HighScoreRecord(
                name=str(item["name"]),
                score=max(0, int(score)),
                date=str(item["date"]),
            )
        )
    return records


class HighScoreTable:
    """Top scores, highest first."""

    def __init__(self, storage: ScoreStorage, limit: int = 10) -> None:
        self.storage = storage
        self.limit = limit

    def load_top_scores(self) -> List[HighScoreRecord]:
        """Return the stored records, or an empty list if they are unreadable."""

        try:
            raw = self.storage.read()
            if not raw:
                return []
            records = _parse_records(raw)
        except (OSError, ValueError, TypeError, KeyError, OverflowError) as exc:
            LOGGER.warning("Ignoring unreadable high scores: %s", exc)
            return []
        records.sort(key=lambda rec: rec.score, reverse=True)
        return records[: self.limit]

    def _save(self, records: List[HighScoreRecord]) -> None:
        self.storage.write(json.dumps([asdict(rec) for rec in records]))

    def submit_score(
        self, name: str, score: int, date: Optional[datetime] = None
    ) -> HighScoreRecord:
        """Insert a record, re-rank and keep the best ``limit`` entries."""

        when = date or datetime.now(timezone.utc)
        record = HighScoreRecord(
            name=name.strip() or DEFAULT_NAME,
            score=max(0, int(score)),
            date=when.isoformat(),
        )
        records = self.load_top_scores()
        records.append(record)
        records.sort(key=lambda rec: rec.score, reverse=True)
        self._save(records[: self.limit])
        LOGGER.info("Recorded score %d for %s", record.score, record.name)
        return record

    def best(self) -> Optional[HighScoreRecord]:
        records = self.load_top_scores()
        return records[0] if records else None

    def clear(self) -> None:
        self._save([])
