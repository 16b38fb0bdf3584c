import json
import os

import pytest

from prsheriff.models import ValidationConfig

pytest_plugins = ('pytest_asyncio',)

ENV_PREFIXES = ("PR_SHERIFF_", "INPUT_", "GITHUB_")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the runner's own CI variables out of the tests."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def config():
    """Permissive configuration: two types, no scope enforcement."""
    return ValidationConfig(
        types=["feat", "fix"],
        scopes=[],
        enforce_scopes=False,
        allow_breaking=True,
    )


@pytest.fixture
def strict_config():
    return ValidationConfig(
        types=["feat", "fix", "BREAKING CHANGE"],
        scopes=["core", "api"],
        enforce_scopes=True,
        allow_breaking=False,
    )


@pytest.fixture
def ignore_file(tmp_path):
    path = tmp_path / "ignored-authors.txt"
    path.write_text(
        "# bots\n"
        "dependabot[bot]\n"
        "renovate-bot  # inline comment\n"
        "\n"
        "Alice Smith <alice@example.com>\n"
    )
    return path


@pytest.fixture
def event_file(tmp_path):
    """Write a pull_request event payload and return its path."""
    def _write(title="feat: add login", login="octocat", email=None, payload=None):
        path = tmp_path / "event.json"
        if payload is None:
            payload = {"pull_request": {"title": title, "user": {"login": login, "email": email}}}
        path.write_text(json.dumps(payload))
        return path
    return _write
