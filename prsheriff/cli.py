#!/usr/bin/env python3
import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

import click
import pyperclip
from rich.console import Console
from rich.markup import escape

from . import __version__
from .actions import author_from_pull_request, load_event, set_output
from .check import PullRequestCheck
from .config import DEFAULT_CONFIG_FILENAME, Config
from .errors import SheriffError
from .models import Author
from .observers import ConsoleLogObserver, FileLogObserver, StepSummaryObserver

console = Console()


def print_configuration(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<16} {'Value'}")
    console.print("-" * 50)
    for name in ["types", "scopes", "enforce_scopes", "allow_breaking", "ignore_authors", "log_file"]:
        value = getattr(config, name)
        if isinstance(value, list):
            value = ", ".join(value)
        console.print(f"{name:<16} {escape(str(value))}")

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.command()
@click.argument("title", required=False)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to the repository root (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("--types", help="Allowed commit types (comma, newline, pipe or JSON list)")
@click.option("--scopes", help="Allowed commit scopes (comma, newline, pipe or JSON list)")
@click.option(
    "--enforce-scopes/--no-enforce-scopes",
    default=None,
    help="Require scopes to come from the allowed list (overrides config setting)",
)
@click.option(
    "--allow-breaking/--no-allow-breaking",
    default=None,
    help="Accept the '!' breaking-change marker (overrides config setting)",
)
@click.option("--author", help="PR author login (defaults to the event payload)")
@click.option("--author-email", help="PR author email")
@click.option(
    "--ignore-authors",
    help="Ignore-authors file path or URL, or true/false for the default file",
)
@click.option(
    "--event-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="GitHub event payload (defaults to GITHUB_EVENT_PATH)",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log check results (overrides config setting)",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    title: Optional[str],
    path: Path,
    types: Optional[str],
    scopes: Optional[str],
    enforce_scopes: Optional[bool],
    allow_breaking: Optional[bool],
    author: Optional[str],
    author_email: Optional[str],
    ignore_authors: Optional[str],
    event_path: Optional[Path],
    log_file: Optional[Path],
    config_list: bool,
    config_dir: bool,
    version: bool,
):
    """
    Check that a pull-request title follows the Conventional-Commits format.

    TITLE is validated as `type(scope1,scope2)!: message`. When TITLE is
    omitted, the title and author are read from the GitHub event payload.

    Configuration can be set in .prsheriff.toml in the repository root.
    Command line options override configuration file settings.
    """
    try:
        if version:
            console.print(f"pr-sheriff {__version__}")
            return

        repo_path = path.absolute()
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if config_dir:
            if not config_path.exists():
                Config().save(repo_path)
                console.print(
                    "[yellow]Created new config file with default values[/yellow]"
                )

            pyperclip.copy(str(config_path))
            console.print(f"[green]Config file location:[/green] {config_path}")
            console.print("[green]Path copied to clipboard![/green]")
            return

        config = Config.load(repo_path)

        # Command line options override config
        overrides = {}
        if types is not None:
            overrides["types"] = types
        if scopes is not None:
            overrides["scopes"] = scopes
        if enforce_scopes is not None:
            overrides["enforce_scopes"] = enforce_scopes
        if allow_breaking is not None:
            overrides["allow_breaking"] = allow_breaking
        if ignore_authors is not None:
            overrides["ignore_authors"] = ignore_authors
        if log_file is not None:
            overrides["log_file"] = str(log_file)
        if overrides:
            config = Config(**{**config.model_dump(), **overrides})

        if config_list:
            print_configuration(config, config_path)
            return

        if title is None:
            pull_request = load_event(event_path)
            title = pull_request.get("title") or ""
            pr_author = author_from_pull_request(pull_request)
        else:
            pr_author = Author(name=author, email=author_email)

        console.print(f'[dim]Title  : "{escape(title)}"[/dim]')
        console.print(f"[dim]Author : {escape(pr_author.name or 'unknown')}[/dim]")
        console.print(f"[dim]Allowed commit types: {escape(', '.join(config.types))}[/dim]")
        if config.enforce_scopes:
            console.print(f"[dim]Allowed commit scopes: {escape(', '.join(config.scopes))}[/dim]")
        else:
            console.print("[dim]Scopes are not enforced[/dim]")
        console.print(f"[dim]Breaking changes allowed: {config.allow_breaking}[/dim]")

        check = PullRequestCheck(config)
        check.add_observer(ConsoleLogObserver(console))

        log_file_path = config.get_log_file()
        if log_file_path:
            check.add_observer(FileLogObserver(str(log_file_path)))

        summary_file = os.environ.get("GITHUB_STEP_SUMMARY")
        if summary_file:
            check.add_observer(StepSummaryObserver(summary_file, check.validation_config))

        outcome = asyncio.run(check.run(title, pr_author))
        set_output("valid", outcome.valid)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return
    except SheriffError as e:
        set_output("valid", False)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    if not outcome.valid:
        sys.exit(1)


if __name__ == "__main__":
    main()
