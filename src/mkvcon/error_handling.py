"""Error handling for mkvcon with user-friendly display."""

import logging
import shutil
from enum import Enum
from pathlib import Path

from rich.console import Console

logger = logging.getLogger(__name__)
console = Console()

# MSG texts that indicate makemkvcon refused or failed the operation
_FAILURE_MARKERS = ("too old", "registration key", "failed", "error")


class ErrorCategory(Enum):
    """Categories of errors for better user experience."""

    CONFIGURATION = "configuration"
    DEPENDENCY = "dependency"
    MEDIA = "media"
    EXTERNAL_TOOL = "external_tool"
    SYSTEM = "system"
    USER_INPUT = "user_input"
    FILESYSTEM = "filesystem"


class MkvconError(Exception):
    """Base exception for mkvcon."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        *,
        solution: str | None = None,
        details: str | None = None,
        recoverable: bool = True,
        log_level: int = logging.ERROR,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.solution = solution
        self.details = details
        self.recoverable = recoverable
        self.log_level = log_level
        self.original_error = original_error

    def display_to_user(self) -> None:
        """Display error to user with helpful context."""
        category_styles = {
            ErrorCategory.CONFIGURATION: "yellow",
            ErrorCategory.DEPENDENCY: "red",
            ErrorCategory.MEDIA: "blue",
            ErrorCategory.EXTERNAL_TOOL: "red",
            ErrorCategory.SYSTEM: "red",
            ErrorCategory.USER_INPUT: "yellow",
            ErrorCategory.FILESYSTEM: "red",
        }
        color = category_styles.get(self.category, "red")
        title = self.category.value.replace("_", " ").title()

        console.print(f"\n[{color} bold]{title} Error[/{color} bold]")
        console.print(f"[{color}]{self.message}[/{color}]")

        if self.details:
            console.print(f"\n[dim]Details:[/dim] {self.details}")

        if self.solution:
            console.print(f"\n[green]Solution:[/green] {self.solution}")

        if self.recoverable:
            console.print(
                "\n[dim]This error may be temporary. You can try again.[/dim]",
            )
        else:
            console.print(
                "\n[dim]This error requires intervention before continuing.[/dim]",
            )

        if self.original_error:
            logger.log(
                self.log_level,
                "%s: %s",
                self.category.value,
                self.message,
                exc_info=self.original_error,
            )
        else:
            logger.log(self.log_level, "%s: %s", self.category.value, self.message)


class ConfigurationError(MkvconError):
    """Configuration-related errors."""

    def __init__(self, message: str, *, config_path: Path | None = None, **kwargs):
        solution = kwargs.pop("solution", None)
        if not solution and config_path:
            solution = f"Check your configuration file at {config_path}"
        super().__init__(
            message,
            ErrorCategory.CONFIGURATION,
            solution=solution,
            **kwargs,
        )


class DependencyError(MkvconError):
    """Missing or broken dependency errors."""

    def __init__(
        self,
        dependency: str,
        *,
        install_command: str | None = None,
        **kwargs,
    ):
        message = f"Required dependency '{dependency}' is not available"
        solution = kwargs.pop("solution", None)
        if not solution and install_command:
            solution = f"Install with: {install_command}"
        super().__init__(
            message,
            ErrorCategory.DEPENDENCY,
            solution=solution,
            recoverable=False,
            **kwargs,
        )


class MediaError(MkvconError):
    """Disc or input data problems."""

    def __init__(self, message: str, **kwargs):
        solution = kwargs.pop(
            "solution",
            "Check the disc is inserted and readable, or that the capture is robot output",
        )
        super().__init__(message, ErrorCategory.MEDIA, solution=solution, **kwargs)


class ExternalToolError(MkvconError):
    """External tool execution errors."""

    def __init__(
        self,
        tool: str,
        exit_code: int | None = None,
        stderr: str | None = None,
        **kwargs,
    ):
        message = kwargs.pop("message", None) or f"{tool} failed"
        if exit_code is not None:
            message += f" with exit code {exit_code}"

        details = kwargs.pop("details", stderr)
        solution = kwargs.pop(
            "solution",
            f"Check {tool} is properly installed and configured",
        )

        super().__init__(
            message,
            ErrorCategory.EXTERNAL_TOOL,
            details=details,
            solution=solution,
            **kwargs,
        )
        self.tool = tool
        self.exit_code = exit_code


def extract_failure_message(messages: list[str]) -> str | None:
    """Pick the first MSG text that looks like a failure reason."""
    for text in messages:
        lowered = text.lower()
        if any(marker in lowered for marker in _FAILURE_MARKERS):
            return text
    return None


def handle_error(
    error: Exception,
    *,
    category: ErrorCategory | None = None,
    **kwargs,
) -> None:
    """Convert generic exceptions to MkvconError and display to user."""
    if isinstance(error, MkvconError):
        error.display_to_user()
        return

    if category is None:
        if isinstance(error, FileNotFoundError | PermissionError | IsADirectoryError):
            category = ErrorCategory.FILESYSTEM
        elif isinstance(error, ValueError):
            category = ErrorCategory.USER_INPUT
        else:
            category = ErrorCategory.SYSTEM

    mkvcon_error = MkvconError(
        message=str(error) or "An unexpected error occurred",
        category=category,
        original_error=error,
        **kwargs,
    )
    mkvcon_error.display_to_user()


def check_dependencies(makemkvcon: str = "makemkvcon") -> list[DependencyError]:
    """Check for missing dependencies and return list of errors."""
    errors = []

    if not shutil.which(makemkvcon):
        errors.append(
            DependencyError(
                "MakeMKV",
                solution="Install MakeMKV from https://makemkv.com/ or your package manager",
                details=f"'{makemkvcon}' was not found on PATH",
            ),
        )

    return errors
