"""
Seed datasets for a board session.

A seed is a JSON or YAML document with "people" and "projects" lists.
Projects may list initial members; each person's project reference is
derived from those member lists.

If no seed file is configured, default_snapshot() provides the built-in
team of four and three projects.
"""

import json
import logging
from pathlib import Path

import yaml

from assignboard.board.models import (
    InconsistentSnapshot,
    Person,
    Project,
    Snapshot,
    check_invariants,
    parse_status,
)
from assignboard.lib.validate import ValidationError, validate

logger = logging.getLogger(__name__)


class SeedError(Exception):
    """Seed dataset could not be loaded."""


DEFAULT_SEED = {
    "people": [
        {
            "id": "1",
            "name": "John Doe",
            "title": "Senior Developer",
            "avatar": "https://i.pravatar.cc/150?img=1",
            "skills": ["React", "TypeScript", "Node.js"],
        },
        {
            "id": "2",
            "name": "Jane Smith",
            "title": "UI Designer",
            "avatar": "https://i.pravatar.cc/150?img=2",
            "skills": ["Figma", "UI/UX", "CSS"],
        },
        {
            "id": "3",
            "name": "Mike Johnson",
            "title": "QA Engineer",
            "avatar": "https://i.pravatar.cc/150?img=3",
            "skills": ["Testing", "Automation", "Jest"],
        },
        {
            "id": "4",
            "name": "Sarah Wilson",
            "title": "Backend Developer",
            "avatar": "https://i.pravatar.cc/150?img=4",
            "skills": ["Python", "Django", "PostgreSQL"],
        },
    ],
    "projects": [
        {
            "id": "p1",
            "name": "Project 1",
            "description": "E-commerce Platform",
            "status": "active",
            "capacity": 3,
        },
        {
            "id": "p2",
            "name": "Project 2",
            "description": "Mobile App Development",
            "status": "on-hold",
            "capacity": 2,
        },
        {
            "id": "p3",
            "name": "Project 3",
            "description": "Data Analytics Dashboard",
            "status": "completed",
            "capacity": 4,
        },
    ],
}


def snapshot_from_data(data: dict) -> Snapshot:
    """
    Build a Snapshot from a parsed seed document.

    Raises:
        SeedError: if the document fails schema validation or breaks
            a membership/capacity invariant
    """
    try:
        validate(data, "seed")
    except ValidationError as e:
        raise SeedError(str(e)) from e

    owner: dict[str, str] = {}
    projects = []
    for p in data["projects"]:
        members = tuple(p.get("members", []))
        for person_id in members:
            owner.setdefault(person_id, p["id"])
        projects.append(Project(
            id=p["id"],
            name=p["name"],
            description=p.get("description", ""),
            status=parse_status(p.get("status", "active")),
            capacity=p["capacity"],
            members=members,
        ))

    people = [
        Person(
            id=person["id"],
            name=person["name"],
            title=person["title"],
            avatar=person.get("avatar", ""),
            skills=tuple(person.get("skills", [])),
            project_id=owner.get(person["id"]),
        )
        for person in data["people"]
    ]

    snapshot = Snapshot(people=tuple(people), projects=tuple(projects))
    try:
        check_invariants(snapshot)
    except InconsistentSnapshot as e:
        raise SeedError(f"Inconsistent seed: {e}") from e
    return snapshot


def load_seed(path: Path) -> Snapshot:
    """
    Load a seed file (.json, .yaml or .yml).

    Raises:
        SeedError: if the file is missing, unparseable or invalid
    """
    if not path.exists():
        raise SeedError(f"Seed file not found: {path}")

    text = path.read_text()
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except yaml.YAMLError as e:
        raise SeedError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SeedError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SeedError(f"Seed file {path} must contain a mapping with 'people' and 'projects'")

    snapshot = snapshot_from_data(data)
    logger.info(f"[SEED] Loaded {len(snapshot.people)} people, {len(snapshot.projects)} projects from {path}")
    return snapshot


def default_snapshot() -> Snapshot:
    """Built-in dataset: four people in the pool, three empty projects."""
    return snapshot_from_data(DEFAULT_SEED)
