import pytest
from unittest.mock import patch

from sat_ascent.app import (
    SessionExitRequested, cmd_challenge, cmd_dashboard, cmd_practice, cmd_reset,
    run_practice_question, session_prompt,
)
from sat_ascent.engine import ProgressEngine
from sat_ascent.generator import FeedbackError, GenerationError
from sat_ascent.models import Question, SubjectStats


def _q(subject="Math", key="B"):
    return Question(
        prompt="What is 2+2?", options={"A": "3", "B": "4", "C": "5", "D": "6"},
        correct_option_key=key, explanation="Add them.", subject=subject, topic="Heart of Algebra",
    )


class StubGenerator:
    def __init__(self, fail=False):
        self.fail = fail
        self.requests = []

    def generate_question(self, subject, difficulty):
        self.requests.append((subject, difficulty))
        if self.fail:
            raise GenerationError("offline")
        return _q(subject)

    def generate_feedback(self, outcome, question):
        raise FeedbackError("offline")


def test_session_exit_requested_is_exception():
    with pytest.raises(SessionExitRequested):
        raise SessionExitRequested()


def test_session_prompt_raises_on_q():
    with patch("sat_ascent.app.Prompt.ask", return_value="q"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_raises_on_menu():
    with patch("sat_ascent.app.Prompt.ask", return_value="menu"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt", choices=["A", "B"])


def test_session_prompt_returns_normal_input():
    with patch("sat_ascent.app.Prompt.ask", return_value="hello"):
        assert session_prompt("test prompt") == "hello"


def test_run_practice_question_correct(store, clock):
    engine = ProgressEngine(store, clock)
    gen = StubGenerator()
    with patch("sat_ascent.app.Prompt.ask", return_value="b"):
        assert run_practice_question(engine, gen, "Math") is True
    assert gen.requests == [("Math", "Medium")]
    assert engine.get_stats()["Math"] == SubjectStats(1, 0)


def test_run_practice_question_incorrect(store, clock):
    engine = ProgressEngine(store, clock)
    with patch("sat_ascent.app.Prompt.ask", return_value="a"):
        assert run_practice_question(engine, StubGenerator(), "Reading") is False
    assert engine.get_stats()["Reading"] == SubjectStats(0, 1)


def test_run_practice_question_generation_failure_records_nothing(store, clock):
    engine = ProgressEngine(store, clock)
    with patch("sat_ascent.app.Prompt.ask") as ask:
        assert run_practice_question(engine, StubGenerator(fail=True), "Math") is None
        ask.assert_not_called()
    assert engine.get_daily_progress().count == 0
    assert store.get("stats") is None


def test_cmd_practice_until_q(store, clock):
    engine = ProgressEngine(store, clock)
    # subject, answer, continue, answer, quit
    with patch("sat_ascent.app.Prompt.ask", side_effect=["Writing", "b", "", "c", "q"]):
        cmd_practice(engine, StubGenerator())
    assert engine.get_stats()["Writing"] == SubjectStats(1, 1)


def test_cmd_challenge_quit_midway_records_answered(store, clock):
    engine = ProgressEngine(store, clock)
    with patch("sat_ascent.app.Prompt.ask", side_effect=["B", "", "q"]):
        cmd_challenge(engine, StubGenerator())
    assert engine.get_stats()["Math"] == SubjectStats(1, 0)
    assert engine.get_daily_progress().count == 1


def test_cmd_challenge_generation_failure(store, clock):
    engine = ProgressEngine(store, clock)
    with patch("sat_ascent.app.Prompt.ask") as ask:
        cmd_challenge(engine, StubGenerator(fail=True))
        ask.assert_not_called()
    assert engine.get_daily_progress().count == 0


def test_cmd_dashboard_runs(store, clock):
    engine = ProgressEngine(store, clock)
    engine.record_answer("Math", False)
    cmd_dashboard(engine)


def test_cmd_reset_confirmed(store, clock):
    engine = ProgressEngine(store, clock)
    engine.record_answer("Math", True)
    with patch("sat_ascent.app.Confirm.ask", return_value=True):
        cmd_reset(engine)
    assert engine.get_daily_progress().count == 0


def test_cmd_reset_declined(store, clock):
    engine = ProgressEngine(store, clock)
    engine.record_answer("Math", True)
    with patch("sat_ascent.app.Confirm.ask", return_value=False):
        cmd_reset(engine)
    assert engine.get_daily_progress().count == 1
