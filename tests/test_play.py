"""Tests for board play script parsing and execution."""

import pytest

from assignboard.board import BoardSession, Outcome
from assignboard.commands.play import ScriptError, Step, parse_script, run_steps
from assignboard.lib.constants import EXIT_FAILED, EXIT_OK
from assignboard.lib.seed import default_snapshot


class TestParseScript:
    """Tests for parse_script()."""

    def test_parse_all_verbs(self):
        text = """
# staff the platform team
move 1 p1
move 1 p3 p1
remove 1
undo
redo
filter react dev
show
"""
        steps = parse_script(text)
        assert [s.verb for s in steps] == ["move", "move", "remove", "undo", "redo", "filter", "show"]
        assert steps[0] == Step(lineno=3, verb="move", args=["1", "p1"])
        assert steps[1].args == ["1", "p3", "p1"]
        assert steps[5].args == ["react", "dev"]

    def test_trailing_comment(self):
        assert parse_script("undo  # back one")[0].args == []

    def test_verbs_case_insensitive(self):
        assert parse_script("UNDO")[0].verb == "undo"

    def test_quoted_filter(self):
        assert parse_script('filter "ui designer"')[0].args == ["ui designer"]

    def test_unknown_verb(self):
        with pytest.raises(ScriptError, match="Line 2: Unknown operation 'assign'"):
            parse_script("undo\nassign 1 p1")

    def test_wrong_arg_count(self):
        with pytest.raises(ScriptError, match="Wrong number of arguments for 'move'"):
            parse_script("move 1")
        with pytest.raises(ScriptError, match="'undo'"):
            parse_script("undo now")

    def test_bad_quoting(self):
        with pytest.raises(ScriptError) as exc_info:
            parse_script('filter "open')
        assert exc_info.value.lineno == 1


class TestRunSteps:
    """Tests for run_steps()."""

    @pytest.fixture
    def session(self):
        return BoardSession(default_snapshot())

    def test_reports_outcomes(self, session):
        out = []
        code = run_steps(session, parse_script("move 1 p1\nmove 1 p3 p1\nremove 1"), out=out.append)

        assert code == EXIT_OK
        assert out == [
            "[1] move 1 p1: ok (assigned) Employee assigned successfully",
            "[2] move 1 p3 p1: ok (transferred) Employee transferred successfully",
            "[3] remove 1: ok (removed) Employee removed from project",
        ]
        assert session.snapshot.person("1").project_id is None

    def test_capacity_rejection_reported(self, session):
        out = []
        script = "move 1 p2\nmove 2 p2\nmove 3 p2"
        code = run_steps(session, parse_script(script), out=out.append)

        assert code == EXIT_OK
        assert out[2] == "[3] move 3 p2: REJECTED (capacity_exceeded) Project has reached maximum team size"
        assert session.snapshot.project("p2").members == ("1", "2")

    def test_strict_stops_on_rejection(self, session):
        out = []
        code = run_steps(session, parse_script("remove 1\nmove 2 p1"), out=out.append, strict=True)

        assert code == EXIT_FAILED
        assert len(out) == 1
        assert "REJECTED (not_found)" in out[0]
        assert session.snapshot.project("p1").members == ()

    def test_undo_redo(self, session):
        out = []
        run_steps(session, parse_script("undo\nmove 1 p1\nundo\nredo\nredo"), out=out.append)
        assert out[0] == "[1] undo: nothing to undo"
        assert out[2] == "[3] undo: ok"
        assert out[3] == "[4] redo: ok"
        assert out[4] == "[5] redo: nothing to redo"
        assert session.snapshot.project("p1").members == ("1",)

    def test_filter(self, session):
        out = []
        run_steps(session, parse_script("filter developer\nfilter cobol"), out=out.append)
        assert out == [
            "[1] filter 'developer': John Doe, Sarah Wilson",
            "[2] filter 'cobol': none",
        ]

    def test_show(self, session):
        out = []
        run_steps(session, parse_script("show"), out=out.append, title="Board")
        assert out[0] == "Board"
        assert out[-1] == "History: position 1/1 (undo: no, redo: no)"

    def test_self_drop_is_ok(self, session):
        out = []
        run_steps(session, parse_script("move 1 p1\nmove 1 p1 p1"), out=out.append, strict=True)
        assert out[1] == "[2] move 1 p1 p1: ok (unchanged) Employee is already on this project"
        assert session.history.size == 2

    def test_history_branch_scenario(self):
        """3 moves, 2 undos, 1 move from an empty history leaves 2 entries."""
        session = BoardSession(default_snapshot(), record_seed=False)
        script = "move 1 p1\nmove 2 p1\nmove 3 p1\nundo\nundo\nmove 4 p3"
        run_steps(session, parse_script(script), out=lambda line: None)
        assert session.history.size == 2
        assert session.history.position == 1
        assert session.snapshot.project("p1").members == ("1",)
        assert session.snapshot.project("p3").members == ("4",)
