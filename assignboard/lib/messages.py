"""User-visible messages, notification severities and status styling."""

OUTCOME_MESSAGES = {
    "assigned": "Employee assigned successfully",
    "transferred": "Employee transferred successfully",
    "removed": "Employee removed from project",
    "unchanged": "Employee is already on this project",
    "capacity_exceeded": "Project has reached maximum team size",
    "not_found": "Employee or project not found",
}

# Textual notify() severities
OUTCOME_SEVERITY = {
    "assigned": "information",
    "transferred": "information",
    "removed": "information",
    "unchanged": "information",
    "capacity_exceeded": "error",
    "not_found": "warning",
}

STATUS_COLORS = {
    "active": "green",
    "completed": "blue",
    "on-hold": "yellow",
}

STATUS_SYMBOLS = {
    "active": "*",
    "completed": "+",
    "on-hold": "~",
}


def outcome_message(outcome: str) -> str:
    return OUTCOME_MESSAGES.get(outcome, outcome)


def outcome_severity(outcome: str) -> str:
    return OUTCOME_SEVERITY.get(outcome, "information")


def format_status(status: str, rich: bool = False) -> str:
    """Format a project status, optionally with Rich markup."""
    symbol = STATUS_SYMBOLS.get(status, "?")
    if not rich:
        return f"[{symbol}] {status}"
    color = STATUS_COLORS.get(status, "")
    if color:
        return f"[{color}]{status}[/{color}]"
    return status
