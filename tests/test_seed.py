"""Tests for assignboard.lib.seed and assignboard.lib.validate modules."""

import json

import pytest

from assignboard.board.models import ProjectStatus, check_invariants
from assignboard.lib.seed import (
    DEFAULT_SEED,
    SeedError,
    default_snapshot,
    load_seed,
    snapshot_from_data,
)
from assignboard.lib.validate import ValidationError, validate


def _seed(**overrides) -> dict:
    data = {
        "people": [
            {"id": "a", "name": "Ann", "title": "Developer", "skills": ["Python"]},
            {"id": "b", "name": "Bob", "title": "Designer"},
        ],
        "projects": [
            {"id": "p1", "name": "One", "capacity": 2, "members": ["b"]},
            {"id": "p2", "name": "Two", "capacity": 1, "status": "on-hold"},
        ],
    }
    data.update(overrides)
    return data


class TestDefaultSnapshot:
    """Tests for the built-in dataset."""

    def test_everyone_starts_in_pool(self):
        snapshot = default_snapshot()
        assert [p.name for p in snapshot.pool()] == [
            "John Doe", "Jane Smith", "Mike Johnson", "Sarah Wilson",
        ]
        assert all(not p.members for p in snapshot.projects)

    def test_projects(self):
        snapshot = default_snapshot()
        summary = [(p.id, p.status, p.capacity) for p in snapshot.projects]
        assert summary == [
            ("p1", ProjectStatus.ACTIVE, 3),
            ("p2", ProjectStatus.ON_HOLD, 2),
            ("p3", ProjectStatus.COMPLETED, 4),
        ]

    def test_skills_keep_order(self):
        assert default_snapshot().person("4").skills == ("Python", "Django", "PostgreSQL")

    def test_default_seed_is_valid(self):
        validate(DEFAULT_SEED, "seed")


class TestSnapshotFromData:
    """Tests for snapshot_from_data()."""

    def test_membership_sets_project_reference(self):
        snapshot = snapshot_from_data(_seed())
        assert snapshot.person("b").project_id == "p1"
        assert snapshot.person("a").project_id is None
        check_invariants(snapshot)

    def test_optional_fields_default(self):
        snapshot = snapshot_from_data(_seed())
        bob = snapshot.person("b")
        assert bob.avatar == ""
        assert bob.skills == ()
        one = snapshot.project("p1")
        assert one.status == ProjectStatus.ACTIVE
        assert one.description == ""

    def test_missing_people(self):
        data = _seed()
        del data["people"]
        with pytest.raises(SeedError, match="people"):
            snapshot_from_data(data)

    def test_zero_capacity_rejected(self):
        data = _seed(projects=[{"id": "p1", "name": "One", "capacity": 0}])
        with pytest.raises(SeedError, match="capacity"):
            snapshot_from_data(data)

    def test_unknown_status_rejected(self):
        data = _seed(projects=[{"id": "p1", "name": "One", "capacity": 1, "status": "paused"}])
        with pytest.raises(SeedError):
            snapshot_from_data(data)

    def test_unknown_field_rejected(self):
        data = _seed()
        data["people"][0]["salary"] = 1
        with pytest.raises(SeedError):
            snapshot_from_data(data)

    def test_over_capacity_is_inconsistent(self):
        data = _seed(projects=[{"id": "p1", "name": "One", "capacity": 1, "members": ["a", "b"]}])
        with pytest.raises(SeedError, match="Inconsistent seed"):
            snapshot_from_data(data)

    def test_member_in_two_projects(self):
        data = _seed(projects=[
            {"id": "p1", "name": "One", "capacity": 2, "members": ["a"]},
            {"id": "p2", "name": "Two", "capacity": 2, "members": ["a"]},
        ])
        with pytest.raises(SeedError, match="Inconsistent seed"):
            snapshot_from_data(data)

    def test_unknown_member(self):
        data = _seed(projects=[{"id": "p1", "name": "One", "capacity": 2, "members": ["ghost"]}])
        with pytest.raises(SeedError, match="unknown person"):
            snapshot_from_data(data)


class TestLoadSeed:
    """Tests for load_seed()."""

    def test_json(self, tmp_path):
        path = tmp_path / "team.json"
        path.write_text(json.dumps(_seed()))
        snapshot = load_seed(path)
        assert [p.id for p in snapshot.pool()] == ["a"]

    def test_yaml(self, tmp_path):
        path = tmp_path / "team.yaml"
        path.write_text("""
people:
  - id: a
    name: Ann
    title: Developer
    skills: [Python, SQL]
projects:
  - id: p1
    name: One
    capacity: 2
    status: completed
    members: [a]
""")
        snapshot = load_seed(path)
        assert snapshot.project("p1").members == ("a",)
        assert snapshot.project("p1").status == ProjectStatus.COMPLETED
        assert snapshot.person("a").skills == ("Python", "SQL")

    def test_missing_file(self, tmp_path):
        with pytest.raises(SeedError, match="not found"):
            load_seed(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "team.json"
        path.write_text("{not json")
        with pytest.raises(SeedError, match="Invalid JSON"):
            load_seed(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "team.yml"
        path.write_text("people: [unclosed")
        with pytest.raises(SeedError, match="Invalid YAML"):
            load_seed(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "team.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(SeedError, match="must contain a mapping"):
            load_seed(path)


class TestValidate:
    """Tests for schema validation."""

    def test_error_carries_path(self):
        data = _seed()
        data["projects"][1]["capacity"] = "two"
        with pytest.raises(ValidationError) as exc_info:
            validate(data, "seed")
        assert exc_info.value.schema_name == "seed"
        assert exc_info.value.path == "projects.1.capacity"

    def test_root_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"people": []}, "seed")
        assert exc_info.value.path == "(root)"

    def test_bad_id(self):
        data = _seed()
        data["people"][0]["id"] = "has space"
        with pytest.raises(ValidationError, match="people.0.id"):
            validate(data, "seed")

    def test_counts_every_violation(self):
        data = _seed()
        data["people"][0]["id"] = "has space"
        data["projects"][0]["capacity"] = 0
        with pytest.raises(ValidationError) as exc_info:
            validate(data, "seed")
        assert exc_info.value.error_count == 2
        assert exc_info.value.path == "people.0.id"
        assert "(and 1 more)" in str(exc_info.value)

    def test_unknown_schema(self):
        with pytest.raises(ValidationError, match="Schema file not found"):
            validate({}, "nonexistent")
