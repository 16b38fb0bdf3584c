"""Observer pattern for title check events."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .models import Author, CheckOutcome, ValidationConfig


class CheckObserver(ABC):
    """Abstract base class for title check observers."""

    @abstractmethod
    async def on_author_ignored(self, author: Author) -> None:
        """Called when validation is skipped for an ignored author."""
        pass

    @abstractmethod
    async def on_check_completed(
        self, title: str, author: Author, outcome: CheckOutcome
    ) -> None:
        """Called once the check has an outcome."""
        pass


def describe_author(author: Author) -> str:
    if author.name and author.email:
        return f"{author.name} <{author.email}>"
    return author.name or author.email or "unknown"


class ConsoleLogObserver(CheckObserver):
    """Observer that logs check events to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_author_ignored(self, author: Author) -> None:
        self.console.print(
            f'[yellow]PR author "{escape(describe_author(author))}" is ignored, skipping validation[/yellow]'
        )

    async def on_check_completed(
        self, title: str, author: Author, outcome: CheckOutcome
    ) -> None:
        if outcome.skipped:
            return
        if outcome.valid:
            self.console.print("[green]PR title passed validation[/green]")
        else:
            self.console.print(
                f"[red]PR title validation failed: {escape(outcome.reason or 'unknown error')}[/red]"
            )


class FileLogObserver(CheckObserver):
    """Observer that logs check events to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_author_ignored(self, author: Author) -> None:
        await self._log(f"Ignored author: {describe_author(author)}")

    async def on_check_completed(
        self, title: str, author: Author, outcome: CheckOutcome
    ) -> None:
        if outcome.skipped:
            status = "Skipped"
        elif outcome.valid:
            status = "Passed"
        else:
            status = f"Failed ({outcome.reason})"
        await self._log(f'{status}: "{title}" by {describe_author(author)}')


class StepSummaryObserver(CheckObserver):
    """Observer that appends a markdown report to the CI step summary."""

    def __init__(self, summary_file: str, config: ValidationConfig):
        self.summary_file = Path(summary_file)
        self.config = config

    async def on_author_ignored(self, author: Author) -> None:
        pass

    def render(self, title: str, author: Author, outcome: CheckOutcome) -> str:
        if outcome.skipped:
            result = "⏭️ Validation skipped"
        elif outcome.valid:
            result = "✅ Validation passed"
        else:
            result = "❌ Validation failed"

        rows = [
            ("PR Title", title),
            ("Author", describe_author(author)),
            ("Result", result),
            ("Breaking changes allowed", str(self.config.allow_breaking).lower()),
            ("Scopes enforced", str(self.config.enforce_scopes).lower()),
        ]
        lines = [
            "## 🕵️ Sheriff - PR Title Check",
            "",
            "| | |",
            "|---|---|",
        ]
        lines.extend(f"| {key} | {value.replace('|', '&#124;')} |" for key, value in rows)

        if not outcome.valid and outcome.reason:
            lines.extend(["", "### ❌ Failure Reason", "", "```", outcome.reason, "```"])

        return "\n".join(lines) + "\n"

    async def on_check_completed(
        self, title: str, author: Author, outcome: CheckOutcome
    ) -> None:
        with self.summary_file.open("a", encoding="utf-8") as f:
            f.write(self.render(title, author, outcome))
