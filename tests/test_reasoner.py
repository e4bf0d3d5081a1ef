from __future__ import annotations

import logging

from nars_core import Config, Reasoner


def _reasoner(seed: int = 7) -> Reasoner:
    return Reasoner(Config(seed=seed))


def test_deduces_answer_to_question():
    reasoner = _reasoner()
    reports: list[str] = []
    reasoner.add_output_channel(reports.append)

    reasoner.input_text("<bird --> animal>.")
    reasoner.input_text("<robin --> bird>.")
    question = reasoner.input_text("<robin --> animal>?")
    assert question is not None

    for _ in range(50):
        reasoner.tick()
        if question.best_solution is not None:
            break

    answer = question.best_solution
    assert answer is not None
    assert answer.content.name == "<robin --> animal>"
    assert answer.truth.expectation > 0.5
    assert any(r.startswith(" OUT: <robin --> animal>.") for r in reports)


def test_input_is_echoed_on_the_next_flush():
    reasoner = _reasoner()
    reports: list[str] = []
    reasoner.add_output_channel(reports.append)
    reasoner.input_text("<a --> b>.")
    assert reports == []
    reasoner.flush()
    assert reports == ["  IN: <a --> b>. %1.00;0.90% {0 : 1}"]


def test_integer_line_runs_cycles():
    reasoner = _reasoner()
    reasoner.input_text("<a --> b>.")
    assert reasoner.input_text("5") is None
    assert reasoner.time == 5
    assert reasoner.status() == {"time": 5, "concepts": 3, "novel_tasks": 0, "new_tasks": 0}


def test_comments_and_blank_lines_are_ignored():
    reasoner = _reasoner()
    assert reasoner.input_lines(["", "   ", "/ a comment", "<a --> b>."]) != []
    assert len(reasoner.memory.new_tasks) == 1


def test_reset_line_empties_memory():
    reasoner = _reasoner()
    reasoner.input_text("<a --> b>.")
    reasoner.cycle(2)
    reasoner.input_text("*")
    assert reasoner.status() == {"time": 0, "concepts": 0, "novel_tasks": 0, "new_tasks": 0}


def test_invalid_line_is_logged_and_skipped(caplog):
    reasoner = _reasoner()
    with caplog.at_level(logging.WARNING, logger="nars_core.reasoner"):
        assert reasoner.input_text("<a --> b") is None
    assert "Rejected input" in caplog.text
    assert len(reasoner.memory.new_tasks) == 0


def test_same_seed_same_trace():
    lines = ["<bird --> animal>.", "<robin --> bird>.", "<robin --> animal>?"]
    traces = []
    for _ in range(2):
        reasoner = _reasoner(seed=3)
        reasoner.input_lines(lines)
        traces.append(reasoner.cycle(30))
    assert traces[0] == traces[1]


def test_removed_channel_gets_nothing():
    reasoner = _reasoner()
    reports: list[str] = []
    reasoner.add_output_channel(reports.append)
    reasoner.remove_output_channel(reports.append)
    reasoner.input_text("<a --> b>.")
    reasoner.tick()
    assert reports == []
