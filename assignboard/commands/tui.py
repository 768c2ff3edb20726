"""
board tui - Interactive assignment board.

UI layer on BoardSession: renders the current Snapshot and issues
operations. Keys stand in for drag-and-drop: [m]ove asks for a person and
a target project; the source is wherever that person's card is shown.
"""

from typing import Optional

from rich.markup import escape
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input, Static

from assignboard.board import BoardSession, Person, Snapshot, SourceKind, TransferResult
from assignboard.lib import messages
from assignboard.lib.config import BoardConfig
from assignboard.lib.tui import ConfirmModal, PromptModal


def drag_source(snapshot: Snapshot, person_id: str) -> tuple[SourceKind, Optional[str]]:
    """Where the person's card currently sits: the pool or a project."""
    project = snapshot.project_of(person_id)
    if project is None:
        return SourceKind.POOL, None
    return SourceKind.PROJECT, project.id


def parse_move_input(text: str) -> Optional[tuple[str, str]]:
    """Parse '<person id> <project id>'. Returns None if malformed."""
    parts = text.split()
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def _format_person(person: Person, with_skills: bool) -> str:
    line = f"{escape(person.id):<4} [bold]{escape(person.name)}[/bold]  [dim]{escape(person.title)}[/dim]"
    if with_skills and person.skills:
        line += "  " + ", ".join(f"[cyan]{escape(s)}[/cyan]" for s in person.skills)
    return line


class PoolWidget(Static):
    """Unassigned people matching the search."""

    people: reactive[list] = reactive(list, always_update=True)
    total: reactive[int] = reactive(0)

    def render(self) -> str:
        shown = len(self.people)
        header = f"[bold]Available Employees[/bold] ({shown}"
        header += f" of {self.total})" if shown != self.total else ")"
        lines = [header]
        if not self.people:
            lines.append("[dim]No matching employees[/dim]")
        for person in self.people:
            lines.append("  " + _format_person(person, with_skills=True))
        return "\n".join(lines)


class ProjectsWidget(Static):
    """Projects with their members and capacity."""

    snapshot: reactive[Optional[Snapshot]] = reactive(None)

    def render(self) -> str:
        if self.snapshot is None:
            return "Loading..."
        if not self.snapshot.projects:
            return "[dim]No projects[/dim]"

        lines = ["[bold]Projects[/bold]"]
        for project in self.snapshot.projects:
            status = messages.format_status(project.status.value, rich=True)
            count = f"{len(project.members)}/{project.capacity}"
            if project.is_full:
                count = f"[red]{count}[/red]"
            lines.append("")
            lines.append(f"[bold]{escape(project.name)}[/bold] ({escape(project.id)})  {status}  Team Members: {count}")
            if project.description:
                lines.append(f"  [dim]{escape(project.description)}[/dim]")
            for person in self.snapshot.members_of(project.id):
                lines.append("    " + _format_person(person, with_skills=False))
        return "\n".join(lines)


class HistoryBar(Static):
    """Action bar; undo/redo are dimmed when unavailable."""

    can_undo: reactive[bool] = reactive(False)
    can_redo: reactive[bool] = reactive(False)

    def render(self) -> str:
        undo = "\\[u]ndo" if self.can_undo else "[dim]\\[u]ndo[/dim]"
        redo = "\\[r]edo" if self.can_redo else "[dim]\\[r]edo[/dim]"
        actions = ["\\[m]ove", "\\[x] remove", undo, redo, "\\[/] search", "\\[R]eset", "\\[q]uit"]
        return " | ".join(actions)


class BoardApp(App):
    """Main board TUI application."""

    AUTO_FOCUS = None

    CSS = """
    #search {
        margin: 0 1;
    }

    #board {
        height: 1fr;
    }

    #pool-box {
        width: 1fr;
        border: solid green;
        padding: 0 1;
    }

    #projects-box {
        width: 1fr;
        border: solid blue;
        padding: 0 1;
    }

    #history-bar {
        dock: bottom;
        height: 1;
        background: $surface;
        padding: 0 1;
    }

    PoolWidget, ProjectsWidget {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("m", "move", "Move", show=False),
        Binding("x", "remove", "Remove", show=False),
        Binding("u", "undo", "Undo", show=False),
        Binding("r", "redo", "Redo", show=False),
        Binding("ctrl+z", "undo", "Undo", show=False),
        Binding("ctrl+y", "redo", "Redo", show=False),
        Binding("slash", "focus_search", "Search", show=False),
        Binding("escape", "blur_search", "Board", show=False),
        Binding("R", "reset", "Reset", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, session: BoardSession, config: BoardConfig) -> None:
        super().__init__()
        self.session = session
        self.config = config

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search employees...", id="search")
        yield Horizontal(
            VerticalScroll(PoolWidget(id="pool"), id="pool-box"),
            VerticalScroll(ProjectsWidget(id="projects"), id="projects-box"),
            id="board",
        )
        yield HistoryBar(id="history-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.config.title
        self.session.on_change = lambda _session: self.refresh_board()
        self.refresh_board()

    def refresh_board(self) -> None:
        """Push the session's current state into the widgets."""
        search = self.query_one("#search", Input).value
        snapshot = self.session.snapshot

        pool_widget = self.query_one("#pool", PoolWidget)
        pool_widget.total = len(snapshot.pool())
        pool_widget.people = self.session.filter(search)

        self.query_one("#projects", ProjectsWidget).snapshot = snapshot

        availability = self.session.availability
        bar = self.query_one("#history-bar", HistoryBar)
        bar.can_undo = availability.can_undo
        bar.can_redo = availability.can_redo

        self.sub_title = f"{pool_widget.total} unassigned"

    @on(Input.Changed, "#search")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.refresh_board()

    def report(self, result: TransferResult) -> None:
        """Show the outcome of an operation as a notification."""
        self.notify(
            result.message,
            severity=messages.outcome_severity(result.outcome.value),
            timeout=self.config.notify_timeout,
        )

    def apply_move(self, text: str) -> Optional[TransferResult]:
        """Apply '<person id> <project id>' as a drop onto the project."""
        parsed = parse_move_input(text)
        if parsed is None:
            if text:
                self.notify("Enter a person id and a project id", severity="warning")
            return None
        person_id, target_id = parsed
        kind, source_id = drag_source(self.session.snapshot, person_id)
        result = self.session.move(person_id, target_id, kind, source_id)
        self.report(result)
        return result

    def apply_remove(self, text: str) -> Optional[TransferResult]:
        """Return the named person to the pool."""
        person_id = text.strip()
        if not person_id:
            return None
        result = self.session.remove_from_project(person_id)
        self.report(result)
        return result

    def action_move(self) -> None:
        self.push_screen(PromptModal("Move: person id, then project id", "1 p1"), self.apply_move)

    def action_remove(self) -> None:
        self.push_screen(PromptModal("Remove from project: person id", "1"), self.apply_remove)

    def action_undo(self) -> None:
        if not self.session.undo():
            self.notify("Nothing to undo", severity="warning", timeout=self.config.notify_timeout)

    def action_redo(self) -> None:
        if not self.session.redo():
            self.notify("Nothing to redo", severity="warning", timeout=self.config.notify_timeout)

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_blur_search(self) -> None:
        self.set_focus(None)

    def action_reset(self) -> None:
        def handle_confirm(confirmed: bool) -> None:
            if confirmed:
                self.session.reset()
                self.notify("Board reset", severity="information", timeout=self.config.notify_timeout)

        self.push_screen(ConfirmModal("Discard all assignments and history?"), handle_confirm)


def cmd_tui(args, config: BoardConfig, session: BoardSession) -> int:
    """Run the interactive board."""
    app = BoardApp(session, config)
    app.run()
    return 0
