import random

import pytest

from linux_trainer.bank import EmptyBank, parse_bank
from linux_trainer.models import QuestionId, SectionScore
from linux_trainer.selector import WEAK_BIAS, choose_index, choose_section_pool, select_question
from conftest import FixedRng, make_question


def test_select_returns_fresh_session(bank, state):
    session = select_question(bank, state, random.Random(1))
    assert bank.contains(session.question_id)
    assert session.record == bank.get(session.question_id)
    assert not session.answer_revealed
    assert not session.hint_revealed
    assert not session.explanation_revealed
    assert not session.hint_used
    assert session.selected_option is None


def test_selector_always_returns_existing_question(bank, state):
    rng = random.Random(42)
    state.weak.add(QuestionId("network", "basic", 1))
    state.answered.add(QuestionId("shell", "basic", 0))
    for _ in range(300):
        session = select_question(bank, state, rng)
        assert bank.contains(session.question_id)


def test_section_pool_weak_half_when_roll_below_bias():
    ranking = ["a", "b", "c", "d", "e"]
    assert choose_section_pool(ranking, FixedRng(roll=WEAK_BIAS - 0.01)) == ["a", "b", "c"]


def test_section_pool_full_ranking_otherwise():
    ranking = ["a", "b", "c", "d"]
    assert choose_section_pool(ranking, FixedRng(roll=WEAK_BIAS)) == ranking
    assert choose_section_pool(ranking, FixedRng(roll=0.99)) == ranking


def test_section_pool_single_section():
    assert choose_section_pool(["only"], FixedRng(roll=0.0)) == ["only"]


def test_weak_bias_prefers_weak_sections(bank, state):
    state.scores["shell"] = SectionScore(correct=10, total=10)
    state.scores["files"] = SectionScore(correct=10, total=10)
    state.scores["network"] = SectionScore(correct=0, total=10)
    rng = random.Random(3)
    picks = [select_question(bank, state, rng).question_id.section for _ in range(1000)]
    # Weak half is [network, shell]: files only comes from the 30% full-pool draws
    assert picks.count("network") > 350
    assert 0 < picks.count("files") < 200


def test_weak_questions_dominate(state):
    bank = parse_bank({"sections": {"shell": {"basic": [make_question() for _ in range(5)]}}})
    state.weak.add(QuestionId("shell", "basic", 3))
    rng = random.Random(0)
    for _ in range(50):
        assert select_question(bank, state, rng).question_id.index == 3


def test_weak_dominates_even_over_unanswered(state):
    state.weak.update({QuestionId("s", "l", 4), QuestionId("s", "l", 1)})
    state.answered.update({QuestionId("s", "l", 4), QuestionId("s", "l", 1)})
    rng = random.Random(5)
    picks = {choose_index(state, "s", "l", 6, rng) for _ in range(100)}
    assert picks == {1, 4}


def test_unanswered_preferred_over_answered(state):
    state.answered.update({QuestionId("s", "l", i) for i in (0, 1, 3)})
    rng = random.Random(9)
    picks = {choose_index(state, "s", "l", 4, rng) for _ in range(100)}
    assert picks == {2}


def test_fallback_when_everything_answered(state):
    state.answered.update({QuestionId("s", "l", i) for i in range(3)})
    rng = random.Random(11)
    picks = {choose_index(state, "s", "l", 3, rng) for _ in range(200)}
    assert picks == {0, 1, 2}


def test_stale_weak_ids_are_ignored(state):
    state.weak.add(QuestionId("s", "l", 10))
    assert choose_index(state, "s", "l", 2, FixedRng()) == 0


def test_weak_ids_from_other_levels_do_not_leak(state):
    state.weak.add(QuestionId("s", "other", 1))
    state.answered.add(QuestionId("s", "l", 0))
    assert choose_index(state, "s", "l", 2, FixedRng()) == 1


def test_same_seed_same_question(bank, state):
    first = [select_question(bank, state, random.Random(123)).question_id for _ in range(3)]
    assert len(set(first)) == 1


def test_empty_bank_raises(state):
    with pytest.raises(EmptyBank):
        select_question(parse_bank({"sections": {}}), state, FixedRng())


def test_section_without_levels_raises(state):
    with pytest.raises(EmptyBank, match="no levels"):
        select_question(parse_bank({"sections": {"shell": {}}}), state, FixedRng())


def test_level_without_questions_raises(state):
    with pytest.raises(EmptyBank, match="no questions"):
        select_question(parse_bank({"sections": {"shell": {"basic": []}}}), state, FixedRng())


def test_default_rng_is_used_when_none_given(bank, state):
    session = select_question(bank, state)
    assert bank.contains(session.question_id)
