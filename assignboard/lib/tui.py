"""Shared TUI components for the board app."""

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Label, Static


class ConfirmModal(ModalScreen[bool]):
    """Simple yes/no confirmation modal."""

    CSS = """
    ConfirmModal {
        align: center middle;
    }

    #confirm-dialog {
        width: auto;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $warning;
    }

    #confirm-message {
        margin-bottom: 1;
    }

    #confirm-hint {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self.message, id="confirm-message"),
            Static("\\[y]es / \\[n]o", id="confirm-hint"),
            id="confirm-dialog",
        )

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class PromptModal(ModalScreen[str]):
    """One-line input modal. Dismisses with the entered text, or "" on cancel."""

    CSS = """
    PromptModal {
        align: center middle;
    }

    #prompt-dialog {
        width: 60;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    #prompt-label {
        margin-bottom: 1;
    }

    #prompt-hint {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, prompt: str, placeholder: str = "") -> None:
        super().__init__()
        self.prompt = prompt
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        yield Container(
            Label(self.prompt, id="prompt-label"),
            Input(placeholder=self.placeholder, id="prompt-input"),
            Label("Press Enter to submit, Escape to cancel", id="prompt-hint"),
            id="prompt-dialog",
        )

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    @on(Input.Submitted, "#prompt-input")
    def on_submit(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip())

    def action_cancel(self) -> None:
        self.dismiss("")
