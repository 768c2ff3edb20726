"""
Entity types for the assignment board.

A Snapshot is one immutable moment of board state: every Person and every
Project with its member list. The unassigned pool is never stored; it is
derived from the Persons that carry no project reference.

All containers are tuples of frozen dataclasses, so two Snapshots can share
untouched records without either being able to change the other.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ProjectStatus(Enum):
    """Project lifecycle status. Display-only, never affects transfers."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"


class SourceKind(Enum):
    """Where a dragged Person comes from."""

    POOL = "pool"
    PROJECT = "project"


def parse_status(value: str | None) -> Optional[ProjectStatus]:
    """Parse a status string into ProjectStatus.

    Returns None if status is unknown.
    """
    if value is None:
        return None
    for status in ProjectStatus:
        if status.value == value:
            return status
    return None


class InconsistentSnapshot(Exception):
    """Raised when a Snapshot breaks a membership or capacity invariant."""


@dataclass(frozen=True)
class Person:
    """A person on the board."""
    id: str
    name: str
    title: str  # Role title, e.g. "Senior Developer"
    avatar: str = ""  # Avatar reference (URL)
    skills: tuple[str, ...] = ()
    project_id: Optional[str] = None  # None means the person is in the pool

    @property
    def assigned(self) -> bool:
        return self.project_id is not None


@dataclass(frozen=True)
class Project:
    """A project with a fixed capacity and an ordered member list of person ids."""
    id: str
    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.ACTIVE
    capacity: int = 1
    members: tuple[str, ...] = ()

    @property
    def is_full(self) -> bool:
        return len(self.members) >= self.capacity

    @property
    def free_slots(self) -> int:
        return max(0, self.capacity - len(self.members))

    def has_member(self, person_id: str) -> bool:
        return person_id in self.members


@dataclass(frozen=True)
class Snapshot:
    """Immutable (people, projects) pair. Equal when structurally equal."""
    people: tuple[Person, ...] = ()
    projects: tuple[Project, ...] = ()
    _people_by_id: dict = field(init=False, repr=False, compare=False, hash=False)
    _projects_by_id: dict = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        # Lookup indexes are private and never handed out
        object.__setattr__(self, "_people_by_id", {p.id: p for p in self.people})
        object.__setattr__(self, "_projects_by_id", {p.id: p for p in self.projects})

    def person(self, person_id: str) -> Optional[Person]:
        return self._people_by_id.get(person_id)

    def project(self, project_id: str | None) -> Optional[Project]:
        if project_id is None:
            return None
        return self._projects_by_id.get(project_id)

    def members_of(self, project_id: str) -> list[Person]:
        """Person records of a project, in member order."""
        project = self.project(project_id)
        if project is None:
            return []
        return [self._people_by_id[pid] for pid in project.members if pid in self._people_by_id]

    def project_of(self, person_id: str) -> Optional[Project]:
        """The project whose member list holds the person, or None."""
        for project in self.projects:
            if person_id in project.members:
                return project
        return None

    def pool(self) -> list[Person]:
        """Unassigned people, in seed order."""
        return [p for p in self.people if p.project_id is None]

    def assigned(self) -> list[Person]:
        return [p for p in self.people if p.project_id is not None]


def check_invariants(snapshot: Snapshot) -> None:
    """
    Verify membership and capacity invariants.

    Raises:
        InconsistentSnapshot: on the first violation found
    """
    person_ids = [p.id for p in snapshot.people]
    if len(set(person_ids)) != len(person_ids):
        raise InconsistentSnapshot("Duplicate person id")

    project_ids = [p.id for p in snapshot.projects]
    if len(set(project_ids)) != len(project_ids):
        raise InconsistentSnapshot("Duplicate project id")

    owner: dict[str, str] = {}
    for project in snapshot.projects:
        if project.capacity < 1:
            raise InconsistentSnapshot(f"Project '{project.id}' has non-positive capacity {project.capacity}")
        if len(project.members) > project.capacity:
            raise InconsistentSnapshot(
                f"Project '{project.id}' has {len(project.members)} members, capacity {project.capacity}"
            )
        for person_id in project.members:
            if snapshot.person(person_id) is None:
                raise InconsistentSnapshot(f"Project '{project.id}' lists unknown person '{person_id}'")
            if person_id in owner:
                raise InconsistentSnapshot(
                    f"Person '{person_id}' is a member of both '{owner[person_id]}' and '{project.id}'"
                )
            owner[person_id] = project.id

    for person in snapshot.people:
        expected = owner.get(person.id)
        if person.project_id != expected:
            raise InconsistentSnapshot(
                f"Person '{person.id}' references project '{person.project_id}' "
                f"but membership says '{expected}'"
            )
