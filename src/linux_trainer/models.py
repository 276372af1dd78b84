"""Data classes for the trainer domain model."""
import re
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

ID_SEPARATOR = "-"
_ESCAPES = {"%": "%25", "-": "%2D"}
_UNESCAPES = {"25": "%", "2D": "-"}
_ESCAPED = re.compile(r"%(25|2D)")


def _escape(name: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in name)


def _unescape(name: str) -> str:
    return _ESCAPED.sub(lambda m: _UNESCAPES[m.group(1)], name)


class QuestionId(NamedTuple):
    section: str
    level: str
    index: int

    def serialize(self) -> str:
        """Encode as "<section>-<level>-<index>", escaping '%' and '-' in names."""
        return ID_SEPARATOR.join((_escape(self.section), _escape(self.level), str(self.index)))

    @classmethod
    def parse(cls, raw: str) -> "QuestionId":
        if not isinstance(raw, str):
            raise ValueError(f"Question id must be a string, got {type(raw).__name__}")
        parts = raw.rsplit(ID_SEPARATOR, 2)
        if len(parts) != 3 or not parts[0] or not parts[1]:
            raise ValueError(f"Malformed question id: {raw!r}")
        section, level, index = parts
        if not index.isdigit():
            raise ValueError(f"Malformed question index in {raw!r}")
        return cls(_unescape(section), _unescape(level), int(index))


@dataclass(frozen=True)
class QuestionRecord:
    question: str
    options: tuple
    correct_index: int
    answer: str = ""
    hint: str = ""
    explanation: str = ""
    example: str = ""
    link: Optional[str] = None

    def is_correct(self, option_index: int) -> bool:
        return option_index == self.correct_index


@dataclass
class SectionScore:
    correct: int = 0
    total: int = 0

    @property
    def rate(self) -> Optional[float]:
        if self.total == 0:
            return None
        return self.correct / self.total


@dataclass
class ProgressState:
    """Long-term learner progress; the only state that is persisted."""
    scores: dict = field(default_factory=dict)  # section -> SectionScore
    weak: set = field(default_factory=set)  # QuestionId
    answered: set = field(default_factory=set)  # QuestionId


@dataclass
class SessionState:
    question_id: QuestionId
    record: QuestionRecord
    answer_revealed: bool = False
    hint_revealed: bool = False
    explanation_revealed: bool = False
    hint_used: bool = False
    selected_option: Optional[int] = None
