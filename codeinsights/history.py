"""
Analysis History

Append-only, per-user store of analysis records kept as JSON Lines.
The pipeline never reads from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import json
import logging
import os

from codeinsights.analyzer import AnalysisResult

logger = logging.getLogger(__name__)


DEFAULT_HISTORY_PATH = os.path.join("~", ".codeinsights", "history.jsonl")


class HistoryError(Exception):
    """History store error"""
    pass


@dataclass
class AnalysisRecord:
    user_id: str
    timestamp: str
    data: Dict[str, Any]

    @property
    def language(self) -> str:
        return self.data.get("language", "")

    @property
    def source_code(self) -> str:
        return self.data.get("sourceCode", "")

    def to_dict(self) -> Dict[str, Any]:
        rec = {"userId": self.user_id}
        rec.update(self.data)
        rec["timestamp"] = self.timestamp
        return rec

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AnalysisRecord":
        data = dict(raw)
        user_id = data.pop("userId")
        timestamp = data.pop("timestamp")
        return cls(user_id=user_id, timestamp=timestamp, data=data)


class HistoryStore:
    """JSON Lines history file keyed by an opaque user id"""

    def __init__(self, path: Optional[str] = None):
        # Storage location: explicit path, then $CODEINSIGHTS_HISTORY.
        self.path = os.path.expanduser(path or os.environ.get("CODEINSIGHTS_HISTORY", DEFAULT_HISTORY_PATH))

    def append(self, user_id: str, result: AnalysisResult, timestamp: Optional[datetime] = None) -> AnalysisRecord:
        """Persist a successful analysis for `user_id`"""
        if not result.success:
            raise HistoryError("only successful analyses are recorded")
        stamp = timestamp or datetime.now(timezone.utc)
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=timezone.utc)
        # always UTC; for_user sorts on this text
        ts = stamp.astimezone(timezone.utc).isoformat()
        record = AnalysisRecord(user_id=user_id, timestamp=ts, data=result.to_dict())

        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, 'a', encoding='utf-8') as f:
            f.write(json.dumps(record.to_dict()) + "\n")
        logger.debug("saved analysis for user %s to %s", user_id, self.path)
        return record

    def records(self) -> List[AnalysisRecord]:
        """Every stored record, in file order"""
        if not os.path.exists(self.path):
            return []
        out: List[AnalysisRecord] = []
        with open(self.path, 'r', encoding='utf-8') as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    out.append(AnalysisRecord.from_dict(json.loads(line)))
                except (ValueError, KeyError, TypeError) as e:
                    raise HistoryError(f"corrupt history record at {self.path}:{lineno}: {e}")
        return out

    def for_user(self, user_id: str) -> List[AnalysisRecord]:
        """Records of one user, newest first"""
        mine = [r for r in self.records() if r.user_id == user_id]
        return sorted(mine, key=lambda r: r.timestamp, reverse=True)
