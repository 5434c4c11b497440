"""
Formatting utilities for terminal output.

ANSI color codes and tagged message helpers used by the CLI.
"""


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    RESET = "\033[0m"


def colored_message(prefix: str, message: str, color: str) -> str:
    """Format a message with colored prefix."""
    return f"{color}{prefix}{Colors.RESET} {message}"


def success_message(message: str) -> str:
    return colored_message("[SUCCESS]", message, Colors.GREEN)


def warning_message(message: str) -> str:
    return colored_message("[WARNING]", message, Colors.YELLOW)


def stats_message(message: str) -> str:
    return colored_message("[STATS]", message, Colors.CYAN)


def saved_message(message: str) -> str:
    return colored_message("[SAVED]", message, Colors.BLUE)
