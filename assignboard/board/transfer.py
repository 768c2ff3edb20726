"""
Transfer engine: validates and applies a single board operation.

Every function here is pure. It takes a Snapshot and returns a
TransferResult holding a brand-new Snapshot; the input Snapshot is never
modified. Rejections are raised as TransferError subclasses. BoardSession
catches them and turns them into results for the caller.

Usage:
    from assignboard.board.transfer import move, SourceKind

    result = move(snapshot, "1", "p1", SourceKind.POOL)
    if result.changed:
        history.record(result.snapshot)
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional

from assignboard.board.models import Person, Project, Snapshot, SourceKind
from assignboard.lib import messages

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Classification of a transfer attempt, for caller-visible messaging."""

    ASSIGNED = "assigned"  # pool -> project
    TRANSFERRED = "transferred"  # project -> project
    REMOVED = "removed"  # project -> pool
    UNCHANGED = "unchanged"  # dropped onto the project the person already belongs to
    NOT_FOUND = "not_found"
    CAPACITY_EXCEEDED = "capacity_exceeded"


SUCCESS_OUTCOMES = (Outcome.ASSIGNED, Outcome.TRANSFERRED, Outcome.REMOVED, Outcome.UNCHANGED)


class TransferError(Exception):
    """Base class for rejected transfers. State is never changed."""

    outcome = Outcome.NOT_FOUND

    def __init__(self, message: str, person_id: str = "", project_id: str = ""):
        self.person_id = person_id
        self.project_id = project_id
        super().__init__(message)


class NotFound(TransferError):
    """Person or project id does not resolve against the declared source."""


class InvalidSource(NotFound):
    """Source kind is 'project' but no resolvable source project id was given."""


class CapacityExceeded(TransferError):
    """Target project is already at capacity."""

    outcome = Outcome.CAPACITY_EXCEEDED


@dataclass(frozen=True)
class TransferResult:
    """What a board operation produced."""
    outcome: Outcome
    snapshot: Snapshot
    message: str = ""
    person_id: str = ""
    project_id: str = ""
    changed: bool = False  # True only when a new Snapshot was produced

    @property
    def ok(self) -> bool:
        return self.outcome in SUCCESS_OUTCOMES

    @classmethod
    def rejected(cls, error: TransferError, snapshot: Snapshot) -> "TransferResult":
        """Build a result for a rejected operation (state unchanged)."""
        return cls(
            outcome=error.outcome,
            snapshot=snapshot,
            message=str(error),
            person_id=error.person_id,
            project_id=error.project_id,
        )


def _resolve_source(
    snapshot: Snapshot,
    person_id: str,
    source_kind: SourceKind,
    source_project_id: Optional[str],
) -> tuple[Person, Optional[Project]]:
    """Find the person inside the declared source.

    Returns (person, source_project); source_project is None for the pool.
    """
    if source_kind == SourceKind.POOL:
        for person in snapshot.pool():
            if person.id == person_id:
                return person, None
        raise NotFound(f"Person '{person_id}' is not in the pool", person_id=person_id)

    if not source_project_id:
        raise InvalidSource("Source project id is required for a project source", person_id=person_id)
    source = snapshot.project(source_project_id)
    if source is None:
        raise InvalidSource(
            f"Source project '{source_project_id}' not found",
            person_id=person_id,
            project_id=source_project_id,
        )
    if not source.has_member(person_id):
        raise NotFound(
            f"Person '{person_id}' is not a member of '{source_project_id}'",
            person_id=person_id,
            project_id=source_project_id,
        )
    person = snapshot.person(person_id)
    if person is None:
        raise NotFound(f"Person '{person_id}' not found", person_id=person_id)
    return person, source


def _rebuild(
    snapshot: Snapshot,
    people: Iterable[Person],
    projects: Iterable[Project],
) -> Snapshot:
    """Fresh Snapshot from replacement records keyed by id.

    Records not replaced are shared with the input Snapshot.
    """
    people_by_id = {p.id: p for p in people}
    projects_by_id = {p.id: p for p in projects}
    return Snapshot(
        people=tuple(people_by_id.get(p.id, p) for p in snapshot.people),
        projects=tuple(projects_by_id.get(p.id, p) for p in snapshot.projects),
    )


def move(
    snapshot: Snapshot,
    person_id: str,
    target_project_id: str,
    source_kind: SourceKind,
    source_project_id: Optional[str] = None,
) -> TransferResult:
    """
    Move a person into a project, from the pool or from another project.

    Args:
        snapshot: Current board state (left untouched)
        person_id: Person being dropped
        target_project_id: Project receiving the person
        source_kind: SourceKind.POOL or SourceKind.PROJECT
        source_project_id: Required when source_kind is PROJECT

    Returns:
        TransferResult with outcome ASSIGNED, TRANSFERRED or UNCHANGED

    Raises:
        NotFound: person not in the declared source, or target missing
        InvalidSource: project source without a resolvable source project
        CapacityExceeded: target already full
    """
    person, source = _resolve_source(snapshot, person_id, source_kind, source_project_id)

    target = snapshot.project(target_project_id)
    if target is None:
        raise NotFound(
            f"Project '{target_project_id}' not found",
            person_id=person_id,
            project_id=target_project_id,
        )

    # Dropping onto the current project: success, no new state
    if target.has_member(person_id):
        logger.debug(f"[MOVE] {person_id} already in {target_project_id}, no-op")
        return TransferResult(
            outcome=Outcome.UNCHANGED,
            snapshot=snapshot,
            message=messages.outcome_message(Outcome.UNCHANGED.value),
            person_id=person_id,
            project_id=target_project_id,
        )

    if target.is_full:
        raise CapacityExceeded(
            messages.outcome_message(Outcome.CAPACITY_EXCEEDED.value),
            person_id=person_id,
            project_id=target_project_id,
        )

    touched_projects = [replace(target, members=target.members + (person_id,))]
    if source is not None:
        touched_projects.append(
            replace(source, members=tuple(m for m in source.members if m != person_id))
        )
    moved = replace(person, project_id=target_project_id)

    outcome = Outcome.ASSIGNED if source is None else Outcome.TRANSFERRED
    new_snapshot = _rebuild(snapshot, [moved], touched_projects)

    from_label = "pool" if source is None else source.id
    logger.info(f"[MOVE] {person_id}: {from_label} -> {target_project_id} ({outcome.value})")

    return TransferResult(
        outcome=outcome,
        snapshot=new_snapshot,
        message=messages.outcome_message(outcome.value),
        person_id=person_id,
        project_id=target_project_id,
        changed=True,
    )


def remove_from_project(snapshot: Snapshot, person_id: str) -> TransferResult:
    """
    Return a person to the pool.

    Raises:
        NotFound: if the person is not a member of any project
    """
    source = snapshot.project_of(person_id)
    person = snapshot.person(person_id)
    if source is None or person is None:
        raise NotFound(f"Person '{person_id}' is not assigned to a project", person_id=person_id)

    emptied = replace(source, members=tuple(m for m in source.members if m != person_id))
    released = replace(person, project_id=None)
    new_snapshot = _rebuild(snapshot, [released], [emptied])

    logger.info(f"[MOVE] {person_id}: {source.id} -> pool (removed)")

    return TransferResult(
        outcome=Outcome.REMOVED,
        snapshot=new_snapshot,
        message=messages.outcome_message(Outcome.REMOVED.value),
        person_id=person_id,
        project_id=source.id,
        changed=True,
    )


def matches(person: Person, text: str) -> bool:
    """Case-insensitive substring match on name, role title, or any skill."""
    needle = text.strip().lower()
    if not needle:
        return True
    if needle in person.name.lower() or needle in person.title.lower():
        return True
    return any(needle in skill.lower() for skill in person.skills)


def filter_pool(pool: Iterable[Person], text: str) -> list[Person]:
    """Filter the pool by search text, preserving order. Never mutates state."""
    return [person for person in pool if matches(person, text)]
