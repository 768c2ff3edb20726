"""Shared constants for the board."""

CONFIG_FILENAME = "board.env"

# CLI exit codes
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2
