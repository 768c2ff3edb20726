"""
board play - Apply a script of board operations.

Script format, one operation per line:

    move PERSON TARGET              # drop from the pool
    move PERSON TARGET FROM         # drop from project FROM
    remove PERSON
    undo
    redo
    filter TEXT...
    show

Blank lines and '#' comments are ignored.
"""

import logging
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from assignboard.board import BoardSession, SourceKind
from assignboard.commands.show import format_board
from assignboard.lib.config import BoardConfig
from assignboard.lib.constants import EXIT_CONFIG, EXIT_FAILED, EXIT_OK

logger = logging.getLogger(__name__)

VERBS = {
    # verb: (min args, max args); None means unbounded
    "move": (2, 3),
    "remove": (1, 1),
    "undo": (0, 0),
    "redo": (0, 0),
    "filter": (0, None),
    "show": (0, 0),
}


class ScriptError(Exception):
    """Script line could not be parsed."""

    def __init__(self, lineno: int, message: str):
        self.lineno = lineno
        super().__init__(f"Line {lineno}: {message}")


@dataclass
class Step:
    """One parsed script line."""
    lineno: int
    verb: str
    args: list[str] = field(default_factory=list)


def parse_script(text: str) -> list[Step]:
    """
    Parse script text into steps.

    Raises:
        ScriptError: on unknown verbs, wrong argument counts or bad quoting
    """
    steps = []
    for lineno, line in enumerate(text.splitlines(), 1):
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            raise ScriptError(lineno, str(e)) from None
        if not tokens:
            continue

        verb, args = tokens[0].lower(), tokens[1:]
        if verb not in VERBS:
            raise ScriptError(lineno, f"Unknown operation '{verb}'")
        low, high = VERBS[verb]
        if len(args) < low or (high is not None and len(args) > high):
            raise ScriptError(lineno, f"Wrong number of arguments for '{verb}'")
        steps.append(Step(lineno=lineno, verb=verb, args=args))
    return steps


def run_steps(
    session: BoardSession,
    steps: list[Step],
    out: Callable[[str], None] = print,
    strict: bool = False,
    title: str = "Team Assignment",
) -> int:
    """
    Apply steps to the session, reporting each result.

    Returns:
        EXIT_OK, or EXIT_FAILED if strict and an operation was rejected
    """
    for step in steps:
        if step.verb == "move":
            person_id, target_id = step.args[0], step.args[1]
            if len(step.args) == 3:
                result = session.move(person_id, target_id, SourceKind.PROJECT, step.args[2])
            else:
                result = session.move(person_id, target_id, SourceKind.POOL)
        elif step.verb == "remove":
            result = session.remove_from_project(step.args[0])
        elif step.verb == "undo":
            out(f"[{step.lineno}] undo: {'ok' if session.undo() else 'nothing to undo'}")
            continue
        elif step.verb == "redo":
            out(f"[{step.lineno}] redo: {'ok' if session.redo() else 'nothing to redo'}")
            continue
        elif step.verb == "filter":
            text = " ".join(step.args)
            names = ", ".join(p.name for p in session.filter(text)) or "none"
            out(f"[{step.lineno}] filter '{text}': {names}")
            continue
        else:
            for line in format_board(session, title=title):
                out(line)
            continue

        marker = "ok" if result.ok else "REJECTED"
        out(f"[{step.lineno}] {step.verb} {' '.join(step.args)}: {marker} ({result.outcome.value}) {result.message}")
        if strict and not result.ok:
            logger.info(f"[PLAY] stopping at line {step.lineno} (strict)")
            return EXIT_FAILED

    return EXIT_OK


def cmd_play(args, config: BoardConfig, session: BoardSession) -> int:
    """Run a script file ('-' for stdin) against the session."""
    if args.script == "-":
        text = sys.stdin.read()
    else:
        path = Path(args.script)
        if not path.exists():
            print(f"ERROR: Script not found: {path}")
            return EXIT_CONFIG
        text = path.read_text()

    try:
        steps = parse_script(text)
    except ScriptError as e:
        print(f"ERROR: {e}")
        return EXIT_FAILED

    code = run_steps(session, steps, strict=args.strict, title=config.title)
    if args.show:
        print()
        for line in format_board(session, title=config.title):
            print(line)
    return code
