"""Weak section and weak question identification."""
from linux_trainer.bank import QuestionBank
from linux_trainer.mastery import accuracy, study_rate
from linux_trainer.models import ProgressState, QuestionId

STUDY_THRESHOLD = 0.70


def rank_sections_by_weakness(bank: QuestionBank, state: ProgressState) -> list[str]:
    """All bank sections, weakest first; ties keep bank order."""
    return sorted(bank.sections(), key=lambda section: accuracy(state, section))


def sections_needing_study(bank: QuestionBank, state: ProgressState,
                           threshold: float = STUDY_THRESHOLD) -> list[str]:
    """Ranked sections below the threshold.

    Unlike the ranking, an unscored section counts as 0% here, so sections
    the learner has never tried are always recommended.
    """
    return [
        section for section in rank_sections_by_weakness(bank, state)
        if study_rate(state, section) < threshold
    ]


def is_question_weak(state: ProgressState, question_id: QuestionId) -> bool:
    return question_id in state.weak


def weak_questions_in(state: ProgressState, section: str, level: str) -> list[int]:
    return sorted(q.index for q in state.weak if q.section == section and q.level == level)


def answered_questions_in(state: ProgressState, section: str, level: str) -> list[int]:
    return sorted(q.index for q in state.answered if q.section == section and q.level == level)
