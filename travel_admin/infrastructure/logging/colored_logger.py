"""Colored operation logger — ANSI-colored console logging for repository operations.

Provides an OperationLogger with color-coded output per operation stage,
making it easy to visually trace cache and store traffic in the terminal.

Color scheme:
    🟢 Green   — Create
    🔵 Blue    — Fetch / paginate
    🟣 Magenta — Search
    🟡 Yellow  — Update
    🟠 Cyan    — Restore / session
    🔴 Red     — Delete / errors
    ⚪ Gray    — Timing / stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Operation Stage Definitions ──────────────────────────────────────

class OperationStage:
    """Predefined operation stages with colors and icons."""

    CREATE = ("CREATE", _Colors.GREEN, "➕")
    FETCH = ("FETCH", _Colors.BLUE, "📥")
    SEARCH = ("SEARCH", _Colors.MAGENTA, "🔎")
    UPDATE = ("UPDATE", _Colors.YELLOW, "✏️")
    DELETE = ("DELETE", _Colors.RED, "🗑️")
    RESTORE = ("RESTORE", _Colors.CYAN, "♻️")
    AUTH = ("AUTH", _Colors.CYAN, "🔑")
    ERROR = ("ERROR", _Colors.RED, "❌")


# ── OperationLogger ──────────────────────────────────────────────────

class OperationLogger:
    """Color-coded logger for repository and session operations.

    Usage:
        log = OperationLogger("travel_admin.repositories.clients")
        with log.timed_step(OperationStage.FETCH, "Fetching page", page_size=10):
            page = await store.query(...)
        log.detail("Cursor advanced", cursor=page.cursor)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        return " | ".join(f"{k}={v}" for k, v in kwargs.items())

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of an operation with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._details(kwargs)}){_Colors.RESET}"
        self._logger.debug(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of an operation."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: BaseException | None = None) -> None:
        """Log an operation error in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.DIM}({self._details(kwargs)}){_Colors.RESET}"
        self._logger.debug(formatted)

    def warning(self, message: str, **kwargs: Any) -> None:
        formatted = f"{_Colors.YELLOW}⚠ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.DIM}({self._details(kwargs)}){_Colors.RESET}"
        self._logger.warning(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Exceptions are logged and re-raised; the caller decides how to
        convert them.
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)
