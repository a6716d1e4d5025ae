"""
Minimal smoke tests for the praxis CLI.

Tests basic functionality:
- App runs without errors
- Readiness is scored and validated
- Plans are generated (table and JSON)
- A planned day is adjusted for readiness
- PRs are detected from a session file
- 1RM table and exercise catalog are shown
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from praxis_engine.cli.main import app


runner = CliRunner()


@pytest.fixture
def workdir(monkeypatch):
    """Temporary directory, also used as PRAXIS_HOME so no user config leaks in."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setenv("PRAXIS_HOME", tmpdir)
        yield Path(tmpdir)


def _write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _first_training_day(workdir: Path) -> Path:
    result = runner.invoke(app, [
        "plan", "--start", "2026-03-02", "--days", "3", "--initial",
        "--equipment", "barbell,rower", "--one-rm", "squat=120", "--json",
    ])
    assert result.exit_code == 0, result.output
    days = json.loads(result.output)
    return _write_json(workdir / "day.json", days[0])


def _session_file(workdir: Path, exercise_id: str = "back_squat") -> Path:
    return _write_json(workdir / "session.json", {
        "id": "sess-1",
        "user_id": "local-user",
        "date": "2026-03-02",
        "started_at": "2026-03-02T17:00:00Z",
        "completed_at": "2026-03-02T18:00:00Z",
        "completed_sets": [
            {"block_id": "s", "exercise_id": exercise_id, "set_index": 0, "weight": 100, "reps": 5},
            {"block_id": "s", "exercise_id": exercise_id, "set_index": 1, "weight": 110, "reps": 3},
        ],
    })


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("readiness", "plan", "adjust", "prs", "one-rm", "exercises"):
            assert command in result.output

    def test_readiness_json(self):
        result = runner.invoke(app, [
            "readiness", "--sleep", "5", "--energy", "5", "--soreness", "1", "--stress", "1", "--json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output)["score"] == 100

    def test_readiness_table(self):
        result = runner.invoke(app, [
            "readiness", "--sleep", "3", "--energy", "3", "--soreness", "3", "--stress", "3",
        ])
        assert result.exit_code == 0
        assert "50" in result.output

    def test_readiness_out_of_range(self):
        result = runner.invoke(app, [
            "readiness", "--sleep", "6", "--energy", "3", "--soreness", "3", "--stress", "3",
        ])
        assert result.exit_code == 1
        assert "between 1 and 5" in result.output

    def test_plan_json_cycle(self, workdir):
        result = runner.invoke(app, [
            "plan", "--start", "2026-03-02", "--days", "4", "--weeks", "2", "--json",
        ])
        assert result.exit_code == 0, result.output
        cycle = json.loads(result.output)
        assert cycle["id"] == "cycle-2026-03-02"
        assert [len(week) for week in cycle["weeks"]] == [7, 7]
        assert cycle["weeks"][0][2]["focus_tags"] == ["rest"]

    def test_plan_initial_json(self, workdir):
        result = runner.invoke(app, [
            "plan", "--start", "2026-03-02", "--days", "5", "--initial", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)) == 5

    def test_plan_table(self, workdir):
        result = runner.invoke(app, ["plan", "--start", "2026-03-02", "--goal", "strength"])
        assert result.exit_code == 0, result.output
        assert "Total" in result.output

    def test_plan_from_profile_file(self, workdir):
        profile = _write_json(workdir / "profile.json", {
            "id": "athlete-7",
            "units": "imperial",
            "strength_numbers": {"bench": 225},
            "preferences": {
                "goal": "conditioning",
                "experience_level": "advanced",
                "training_days_per_week": 6,
                "equipment_ids": ["rower"],
            },
        })
        result = runner.invoke(app, [
            "plan", "--start", "2026-03-02", "--profile", str(profile), "--initial", "--json",
        ])
        assert result.exit_code == 0, result.output
        days = json.loads(result.output)
        assert len(days) == 6
        assert {d["user_id"] for d in days} == {"athlete-7"}

    def test_plan_invalid_days(self, workdir):
        result = runner.invoke(app, ["plan", "--days", "2"])
        assert result.exit_code == 1

    def test_plan_bad_start_date(self, workdir):
        result = runner.invoke(app, ["plan", "--start", "02/03/2026"])
        assert result.exit_code == 1

    def test_plan_bad_one_rm(self, workdir):
        result = runner.invoke(app, ["plan", "--one-rm", "squat"])
        assert result.exit_code != 0

    def test_adjust_with_score(self, workdir):
        day_file = _first_training_day(workdir)
        result = runner.invoke(app, [
            "adjust", str(day_file), "--readiness", "30", "--mode", "conservative", "--json",
        ])
        assert result.exit_code == 0, result.output
        adjusted = json.loads(result.output)
        original = json.loads(day_file.read_text(encoding="utf-8"))
        assert adjusted["adjusted_for_readiness"] is True
        assert adjusted["estimated_duration_minutes"] == original["estimated_duration_minutes"]
        assert adjusted["blocks"][0] == original["blocks"][0]

    def test_adjust_with_ratings_file(self, workdir):
        day_file = _first_training_day(workdir)
        ratings = _write_json(workdir / "ratings.json", {
            "sleep_quality": 2, "energy": 2, "soreness": 4, "stress": 4,
        })
        result = runner.invoke(app, ["adjust", str(day_file), "--readiness-file", str(ratings)])
        assert result.exit_code == 0, result.output

    def test_adjust_no_scaling(self, workdir):
        day_file = _first_training_day(workdir)
        result = runner.invoke(app, [
            "adjust", str(day_file), "--readiness", "10", "--no-scaling", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == json.loads(day_file.read_text(encoding="utf-8"))

    def test_adjust_needs_one_readiness_source(self, workdir):
        day_file = _first_training_day(workdir)
        result = runner.invoke(app, ["adjust", str(day_file)])
        assert result.exit_code == 1

    def test_adjust_missing_file(self, workdir):
        result = runner.invoke(app, ["adjust", str(workdir / "nope.json"), "--readiness", "70"])
        assert result.exit_code == 1

    def test_adjust_rejects_non_object_day(self, workdir):
        day_file = _write_json(workdir / "days.json", [{"id": "x", "date": "2026-03-02"}])
        result = runner.invoke(app, ["adjust", str(day_file), "--readiness", "70"])
        assert result.exit_code == 1
        assert "JSON object" in result.output

    def test_prs_rejects_non_object_session(self, workdir):
        session = _write_json(workdir / "sessions.json", [])
        result = runner.invoke(app, ["prs", str(session)])
        assert result.exit_code == 1
        assert "JSON object" in result.output

    def test_prs_json(self, workdir):
        session = _session_file(workdir)
        result = runner.invoke(app, ["prs", str(session), "--json"])
        assert result.exit_code == 0, result.output
        records = json.loads(result.output)
        assert len(records) == 1
        assert records[0]["exercise_id"] == "back_squat"
        assert records[0]["set_index"] == 1

    def test_prs_against_existing_records(self, workdir):
        session = _session_file(workdir)
        records = _write_json(workdir / "records.json", [
            {"exercise_id": "back_squat", "estimated_1rm": 130},
        ])
        result = runner.invoke(app, ["prs", str(session), "--records", str(records), "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == []

    def test_prs_table(self, workdir):
        result = runner.invoke(app, ["prs", str(_session_file(workdir))])
        assert result.exit_code == 0, result.output
        assert "121.0" in result.output

    def test_prs_unknown_exercise(self, workdir):
        session = _session_file(workdir, exercise_id="zercher_squat")
        result = runner.invoke(app, ["prs", str(session)])
        assert result.exit_code == 1

        result = runner.invoke(app, ["prs", str(session), "--allow-unknown", "--json"])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)) == 1

    def test_one_rm_json(self):
        """100 × 10 → 133.33; 80% → 106.67 → 107.5 kg"""
        result = runner.invoke(app, ["one-rm", "100", "10", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["estimated_1rm"] == pytest.approx(133.33)
        assert data["loads"]["80"] == 107.5

    def test_one_rm_table(self):
        result = runner.invoke(app, ["one-rm", "225", "5", "--units", "imperial"])
        assert result.exit_code == 0, result.output
        assert "lb" in result.output

    def test_exercises_filtered(self):
        result = runner.invoke(app, ["exercises", "--pattern", "squat", "--json"])
        assert result.exit_code == 0
        ids = [ex["id"] for ex in json.loads(result.output)]
        assert "back_squat" in ids
        assert "deadlift" not in ids

        result = runner.invoke(app, [
            "exercises", "--pattern", "squat", "--equipment", "kettlebell", "--json",
        ])
        ids = [ex["id"] for ex in json.loads(result.output)]
        assert "back_squat" not in ids
        assert "kb_goblet_squat" in ids

    def test_exercises_table(self):
        result = runner.invoke(app, ["exercises", "--tag", "hyrox"])
        assert result.exit_code == 0
        assert "hyrox" in result.output
