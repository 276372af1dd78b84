import pytest

from linux_trainer.bank import parse_bank
from linux_trainer.models import ProgressState


def make_question(text="Q?", options=("a", "b", "c", "d"), correct=0, **extra):
    record = {
        "question": text,
        "options": list(options),
        "correctIndex": correct,
        "answer": f"answer to {text}",
        "hint": f"hint for {text}",
        "explanation": f"explanation of {text}",
        "example": f"$ example {text}",
    }
    record.update(extra)
    return record


class FixedRng:
    """Stand-in for random.Random: fixed roll, always the first choice."""

    def __init__(self, roll=0.0):
        self.roll = roll

    def random(self):
        return self.roll

    def choice(self, seq):
        return seq[0]

    def randrange(self, stop):
        return 0


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_trainer.db")
    return db_path


@pytest.fixture
def bank_data():
    return {
        "sections": {
            "shell": {
                "basic": [make_question("pwd?", correct=1), make_question("echo?", correct=2)],
                "intermediate": [make_question("export?", correct=0)],
            },
            "network": {
                "basic": [make_question(f"net {i}?", correct=3) for i in range(3)],
            },
            "files": {
                "advanced": [make_question("find?", correct=1, link="https://example.org/find")],
            },
        }
    }


@pytest.fixture
def bank(bank_data):
    return parse_bank(bank_data)


@pytest.fixture
def state():
    return ProgressState()
