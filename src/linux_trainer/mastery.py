"""Per-section accuracy and overall progress."""
from linux_trainer.models import ProgressState, SectionScore

NEUTRAL_ACCURACY = 0.5


def get_mastery_label(rate: float | None) -> str:
    if rate is None:
        return "UNSCORED"
    if rate >= 70:
        return "STRONG"
    elif rate >= 50:
        return "NEEDS WORK"
    return "WEAK"


def get_mastery_color(rate: float | None) -> str:
    if rate is None:
        return "dim"
    if rate >= 70:
        return "green"
    elif rate >= 50:
        return "yellow"
    return "red"


def record_outcome(state: ProgressState, section: str, is_correct: bool) -> SectionScore:
    score = state.scores.setdefault(section, SectionScore())
    score.total += 1
    if is_correct:
        score.correct += 1
    return score


def accuracy(state: ProgressState, section: str) -> float:
    """Accuracy used for ranking; unscored sections count as unknown (0.5)."""
    score = state.scores.get(section)
    if score is None or score.total == 0:
        return NEUTRAL_ACCURACY
    return score.correct / score.total


def study_rate(state: ProgressState, section: str) -> float:
    """Accuracy used by the study filter; unscored sections count as 0."""
    score = state.scores.get(section)
    if score is None or score.total == 0:
        return 0.0
    return score.correct / score.total


def overall_progress(state: ProgressState) -> float:
    """Overall accuracy across all sections as a percentage."""
    correct = sum(s.correct for s in state.scores.values())
    total = sum(s.total for s in state.scores.values())
    if total == 0:
        return 0.0
    return (correct / total) * 100


def scoreboard(state: ProgressState) -> list[dict]:
    rows = []
    for section, score in state.scores.items():
        percent = score.rate * 100 if score.total else None
        rate = round(percent, 1) if percent is not None else None
        rows.append({
            "section": section,
            "correct": score.correct,
            "total": score.total,
            "rate": rate,
            "label": get_mastery_label(percent),
            "color": get_mastery_color(percent),
        })
    return rows
