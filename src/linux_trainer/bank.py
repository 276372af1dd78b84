"""Question bank loading and lookup."""
import json
import os
from pathlib import Path

from loguru import logger

from linux_trainer.models import QuestionId, QuestionRecord

CONTENT_DIR = Path(__file__).parent / "content"
DEFAULT_BANK_PATH = os.environ.get("LINUX_TRAINER_BANK", str(CONTENT_DIR / "questions.json"))


class EmptyBank(Exception):
    """The bank has no sections, levels or questions where one was needed."""


class MalformedBank(ValueError):
    """The bank document does not have the expected shape."""


class QuestionBank:
    """Read-only view over section -> level -> [QuestionRecord]."""

    def __init__(self, sections: dict):
        self._sections = sections

    def sections(self) -> list[str]:
        return list(self._sections)

    def levels(self, section: str) -> list[str]:
        return list(self._sections[section])

    def questions(self, section: str, level: str) -> list[QuestionRecord]:
        return self._sections[section][level]

    def get(self, question_id: QuestionId) -> QuestionRecord:
        return self._sections[question_id.section][question_id.level][question_id.index]

    def contains(self, question_id: QuestionId) -> bool:
        levels = self._sections.get(question_id.section, {})
        return 0 <= question_id.index < len(levels.get(question_id.level, []))

    def question_count(self) -> int:
        return sum(len(qs) for levels in self._sections.values() for qs in levels.values())


def _parse_record(raw, where: str) -> QuestionRecord:
    if not isinstance(raw, dict):
        raise MalformedBank(f"{where}: question must be a mapping")
    try:
        options = raw["options"]
        correct_index = raw["correctIndex"]
        question = raw["question"]
    except KeyError as e:
        raise MalformedBank(f"{where}: missing field {e.args[0]!r}") from e
    if not isinstance(options, list) or not options:
        raise MalformedBank(f"{where}: options must be a non-empty list")
    if isinstance(correct_index, bool) or not isinstance(correct_index, int) \
            or not 0 <= correct_index < len(options):
        raise MalformedBank(f"{where}: correctIndex {correct_index!r} is not a valid option index")
    return QuestionRecord(
        question=question,
        options=tuple(str(o) for o in options),
        correct_index=correct_index,
        answer=raw.get("answer", ""),
        hint=raw.get("hint", ""),
        explanation=raw.get("explanation", ""),
        example=raw.get("example", ""),
        link=raw.get("link") or None,
    )


def _name(key, where: str) -> str:
    # YAML reads keys such as `1:` as ints; ids need text names
    name = str(key)
    if not name:
        raise MalformedBank(f"{where}: names must not be empty")
    return name


def parse_bank(data: dict) -> QuestionBank:
    """Build a QuestionBank from a {"sections": {...}} document."""
    if not isinstance(data, dict) or not isinstance(data.get("sections"), dict):
        raise MalformedBank("bank must be a mapping with a 'sections' mapping")
    sections = {}
    for key, levels in data["sections"].items():
        section = _name(key, "section")
        if section in sections:
            raise MalformedBank(f"duplicate section {section!r}")
        if not isinstance(levels, dict):
            raise MalformedBank(f"{section}: levels must be a mapping")
        sections[section] = {}
        for level_key, records in levels.items():
            level = _name(level_key, f"{section}: level")
            if level in sections[section]:
                raise MalformedBank(f"{section}: duplicate level {level!r}")
            if not isinstance(records, list):
                raise MalformedBank(f"{section}/{level}: questions must be a list")
            sections[section][level] = [
                _parse_record(raw, f"{section}/{level}/{i}") for i, raw in enumerate(records)
            ]
    return QuestionBank(sections)


def load_bank(path: str = DEFAULT_BANK_PATH) -> QuestionBank:
    """Load a question bank from a JSON or YAML file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        import yaml
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    else:
        data = json.loads(path.read_text(encoding="utf-8"))
    bank = parse_bank(data)
    logger.debug("Loaded {} questions in {} sections from {}",
                 bank.question_count(), len(bank.sections()), path)
    return bank
