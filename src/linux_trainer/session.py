"""Question lifecycle: present, hint, answer, explanation, next."""
import random

from loguru import logger

from linux_trainer import mastery, review
from linux_trainer.bank import QuestionBank
from linux_trainer.models import ProgressState, QuestionId, QuestionRecord, SessionState
from linux_trainer.selector import select_question
from linux_trainer.store import StateStore

IDLE = "idle"
PRESENTED = "presented"
ANSWER_REVEALED = "answer_revealed"
EXPLANATION_REVEALED = "explanation_revealed"


class SessionError(Exception):
    """A command was issued in a state that does not accept it."""


class OutOfRangeSelection(SessionError):
    """An option was selected with no open question or an invalid index."""


def record_answer(state: ProgressState, question_id: QuestionId, is_correct: bool,
                  hint_used: bool, store: StateStore | None = None) -> None:
    """Apply one answered question to the progress state and persist it."""
    mastery.record_outcome(state, question_id.section, is_correct)
    state.answered.add(question_id)
    if not is_correct or hint_used:
        state.weak.add(question_id)
    else:
        state.weak.discard(question_id)
    logger.info("Answered {} correct={} hint={}", question_id.serialize(), is_correct, hint_used)
    if store is not None:
        store.save(state)


class SessionController:
    def __init__(self, bank: QuestionBank, state: ProgressState,
                 store: StateStore | None = None, rng: random.Random | None = None):
        self.bank = bank
        self.state = state
        self.store = store
        self.rng = rng
        self.session: SessionState | None = None

    @property
    def phase(self) -> str:
        if self.session is None:
            return IDLE
        if self.session.explanation_revealed:
            return EXPLANATION_REVEALED
        if self.session.answer_revealed:
            return ANSWER_REVEALED
        return PRESENTED

    def start(self) -> SessionState:
        return self.next()

    def next(self) -> SessionState:
        if self.phase == PRESENTED:
            raise SessionError("Answer the current question before moving on")
        self.session = select_question(self.bank, self.state, self.rng)
        return self.session

    def select_option(self, option_index: int) -> bool:
        """Lock in an answer and record it. Returns whether it was correct."""
        if self.phase != PRESENTED:
            raise OutOfRangeSelection("No open question to answer")
        if not 0 <= option_index < len(self.session.record.options):
            raise OutOfRangeSelection(f"Option {option_index} is out of range")
        session = self.session
        session.selected_option = option_index
        session.answer_revealed = True
        is_correct = session.record.is_correct(option_index)
        record_answer(self.state, session.question_id, is_correct, session.hint_used, self.store)
        return is_correct

    def request_hint(self) -> None:
        if self.phase != PRESENTED:
            return
        self.session.hint_revealed = True
        self.session.hint_used = True

    def show_explanation(self) -> None:
        if self.phase not in (ANSWER_REVEALED, EXPLANATION_REVEALED):
            return
        self.session.explanation_revealed = True

    def current_question(self) -> QuestionRecord | None:
        return self.session.record if self.session else None

    def current_id(self) -> QuestionId | None:
        return self.session.question_id if self.session else None

    def current_section(self) -> str | None:
        return self.session.question_id.section if self.session else None

    def current_level(self) -> str | None:
        return self.session.question_id.level if self.session else None

    def is_correct(self) -> bool | None:
        if self.session is None or self.session.selected_option is None:
            return None
        return self.session.record.is_correct(self.session.selected_option)

    def overall_progress(self) -> float:
        return mastery.overall_progress(self.state)

    def scoreboard(self) -> list[dict]:
        return mastery.scoreboard(self.state)

    def sections_needing_study(self) -> list[str]:
        return review.sections_needing_study(self.bank, self.state)
