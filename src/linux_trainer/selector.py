"""Adaptive question selection."""
import math
import random

from loguru import logger

from linux_trainer.bank import EmptyBank, QuestionBank
from linux_trainer.models import ProgressState, QuestionId, SessionState
from linux_trainer.review import (
    answered_questions_in, rank_sections_by_weakness, weak_questions_in,
)

WEAK_BIAS = 0.70

_default_rng = random.Random()


def choose_section_pool(ranking: list[str], rng: random.Random) -> list[str]:
    """Weaker half of the ranking WEAK_BIAS of the time, else every section."""
    half = math.ceil(len(ranking) / 2)
    if rng.random() < WEAK_BIAS:
        return ranking[:half]
    return ranking


def choose_index(state: ProgressState, section: str, level: str, count: int,
                 rng: random.Random) -> int:
    # Stale ids from an older bank may point past the end
    weak = [i for i in weak_questions_in(state, section, level) if i < count]
    if weak:
        return rng.choice(weak)
    answered = set(answered_questions_in(state, section, level))
    unanswered = [i for i in range(count) if i not in answered]
    if unanswered:
        return rng.choice(unanswered)
    return rng.randrange(count)


def select_question(bank: QuestionBank, state: ProgressState,
                    rng: random.Random | None = None) -> SessionState:
    """Pick the next question and return a fresh session state for it."""
    rng = rng or _default_rng
    ranking = rank_sections_by_weakness(bank, state)
    if not ranking:
        raise EmptyBank("Question bank has no sections")
    section = rng.choice(choose_section_pool(ranking, rng))
    levels = bank.levels(section)
    if not levels:
        raise EmptyBank(f"Section {section!r} has no levels")
    level = rng.choice(levels)
    questions = bank.questions(section, level)
    if not questions:
        raise EmptyBank(f"Level {section}/{level} has no questions")
    index = choose_index(state, section, level, len(questions), rng)
    question_id = QuestionId(section, level, index)
    logger.debug("Selected {}", question_id.serialize())
    return SessionState(question_id=question_id, record=questions[index])
