"""
board show - Print the board: pool, projects, history position.
"""

from assignboard.board import BoardSession
from assignboard.lib import messages
from assignboard.lib.config import BoardConfig
from assignboard.lib.constants import EXIT_OK


def format_board(session: BoardSession, title: str = "Team Assignment", search: str = "") -> list[str]:
    """Render the session as plain text lines."""
    snapshot = session.snapshot
    pool = snapshot.pool()
    shown = session.filter(search) if search else pool

    lines = [title, "=" * 60, ""]

    if search:
        lines.append(f"Available Employees ({len(shown)} of {len(pool)} matching '{search}')")
    else:
        lines.append(f"Available Employees ({len(pool)})")
    lines.append("-" * 60)
    if shown:
        for person in shown:
            skills = ", ".join(person.skills)
            lines.append(f"  {person.id:<6} {person.name:<20} {person.title:<22} {skills}")
    else:
        lines.append("  none")
    lines.append("")

    lines.append("Projects")
    lines.append("-" * 60)
    for project in snapshot.projects:
        status = messages.format_status(project.status.value)
        count = f"{len(project.members)}/{project.capacity}"
        lines.append(f"  {project.id:<6} {project.name:<20} {status:<14} {count:<6} {project.description}")
        for person in snapshot.members_of(project.id):
            lines.append(f"         - {person.id} {person.name} ({person.title})")
    lines.append("")

    history = session.history
    availability = session.availability
    lines.append(
        f"History: position {history.position + 1}/{history.size}"
        f" (undo: {'yes' if availability.can_undo else 'no'},"
        f" redo: {'yes' if availability.can_redo else 'no'})"
    )
    return lines


def cmd_show(args, config: BoardConfig, session: BoardSession) -> int:
    """Print the board."""
    for line in format_board(session, title=config.title, search=getattr(args, "filter", "") or ""):
        print(line)
    return EXIT_OK
