"""Tests for GitHub Actions plumbing."""
import pytest

from prsheriff.actions import author_from_pull_request, load_event, set_output
from prsheriff.errors import EventPayloadError
from prsheriff.models import Author


def test_load_event(event_file):
    pull_request = load_event(event_file(title="fix: bug", login="octocat"))
    assert pull_request["title"] == "fix: bug"


def test_load_event_from_environment(event_file, monkeypatch):
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_file()))
    assert load_event()["title"] == "feat: add login"


def test_load_event_without_path():
    with pytest.raises(EventPayloadError):
        load_event()


def test_load_event_not_a_pull_request(event_file):
    with pytest.raises(EventPayloadError, match="only supports pull_request events"):
        load_event(event_file(payload={"push": {}}))


def test_load_event_invalid_json(tmp_path):
    path = tmp_path / "event.json"
    path.write_text("{not json")
    with pytest.raises(EventPayloadError):
        load_event(path)


def test_author_from_pull_request():
    pr = {"user": {"login": "octocat", "email": "octocat@example.com"}}
    assert author_from_pull_request(pr) == Author(name="octocat", email="octocat@example.com")
    assert author_from_pull_request({}) == Author(name=None, email=None)


def test_set_output(tmp_path, monkeypatch):
    output = tmp_path / "output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))

    set_output("valid", True)
    set_output("reason", "type must be lowercase")

    assert output.read_text() == "valid=true\nreason=type must be lowercase\n"


def test_set_output_without_runner(tmp_path):
    # No GITHUB_OUTPUT: nothing written, nothing raised
    set_output("valid", False)
    assert list(tmp_path.iterdir()) == []
