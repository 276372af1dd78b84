"""Persistent progress state: scores, weak questions and answered questions."""
import json

from loguru import logger

from linux_trainer.db import DEFAULT_DB_PATH, get_connection, init_db
from linux_trainer.models import ProgressState, QuestionId, SectionScore

SCORES_KEY = "scores"
WEAK_KEY = "weakQuestions"
ANSWERED_KEY = "answeredQuestions"
SLOTS = (SCORES_KEY, WEAK_KEY, ANSWERED_KEY)


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def parse_scores(raw) -> dict:
    if not isinstance(raw, dict):
        raise ValueError("scores must be a mapping")
    scores = {}
    for section, entry in raw.items():
        if not isinstance(entry, dict):
            raise ValueError(f"score for {section!r} must be a mapping")
        correct, total = entry.get("correct"), entry.get("total")
        if not (_is_count(correct) and _is_count(total)) or correct > total:
            raise ValueError(f"invalid score for {section!r}: {entry!r}")
        scores[section] = SectionScore(correct=correct, total=total)
    return scores


def parse_id_set(raw) -> set:
    if not isinstance(raw, list):
        raise ValueError("question id slot must be a list")
    ids = set()
    for item in raw:
        try:
            ids.add(QuestionId.parse(item))
        except ValueError as e:
            logger.warning("Skipping stored question id: {}", e)
    return ids


def dump_scores(scores: dict) -> dict:
    return {section: {"correct": s.correct, "total": s.total} for section, s in scores.items()}


def dump_id_set(ids: set) -> list:
    return sorted(qid.serialize() for qid in ids)


class StateStore:
    """Key/value slots in SQLite, each holding one JSON document."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        init_db(db_path)

    def get_slot(self, key: str) -> str | None:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute("SELECT value FROM progress_state WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return row["value"] if row else None

    def set_slot(self, key: str, value: str) -> None:
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                "INSERT INTO progress_state (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
                (key, value, value),
            )
            conn.commit()
        finally:
            conn.close()

    def _load_slot(self, key: str, parse, default):
        raw = self.get_slot(key)
        if raw is None:
            return default
        try:
            return parse(json.loads(raw))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning("Discarding malformed {} slot in {}: {}", key, self.db_path, e)
            return default

    def load(self) -> ProgressState:
        state = ProgressState(
            scores=self._load_slot(SCORES_KEY, parse_scores, {}),
            weak=self._load_slot(WEAK_KEY, parse_id_set, set()),
            answered=self._load_slot(ANSWERED_KEY, parse_id_set, set()),
        )
        logger.debug("Loaded state: {} sections scored, {} weak, {} answered",
                     len(state.scores), len(state.weak), len(state.answered))
        return state

    def save(self, state: ProgressState) -> None:
        """Overwrite all three slots with the current snapshot."""
        snapshot = {
            SCORES_KEY: json.dumps(dump_scores(state.scores)),
            WEAK_KEY: json.dumps(dump_id_set(state.weak)),
            ANSWERED_KEY: json.dumps(dump_id_set(state.answered)),
        }
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.executemany(
                    "INSERT INTO progress_state (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    list(snapshot.items()),
                )
        finally:
            conn.close()
        logger.debug("Saved state to {}", self.db_path)

    def reset(self) -> None:
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.executemany("DELETE FROM progress_state WHERE key = ?", [(k,) for k in SLOTS])
        finally:
            conn.close()
        logger.info("Progress reset in {}", self.db_path)
