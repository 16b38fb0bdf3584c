"""GitHub Actions plumbing: event payload in, step outputs out."""
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import EventPayloadError
from .models import Author


def load_event(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Return the ``pull_request`` object of the triggering event.

    Args:
        path: Event payload file; defaults to ``GITHUB_EVENT_PATH``

    Raises:
        EventPayloadError: If there is no payload or it is not a pull-request event
    """
    event_path = path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        raise EventPayloadError("No event payload found (GITHUB_EVENT_PATH is not set)")

    try:
        with Path(event_path).open(encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise EventPayloadError(f"Could not read event payload {event_path}: {e}") from e

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    if not isinstance(pull_request, dict):
        raise EventPayloadError("This action only supports pull_request events")
    return pull_request


def author_from_pull_request(pull_request: Dict[str, Any]) -> Author:
    user = pull_request.get("user") or {}
    return Author(name=user.get("login"), email=user.get("email"))


def set_output(name: str, value: Any, path: Optional[Union[str, Path]] = None) -> None:
    """Append ``name=value`` to the step output file, if the runner provides one."""
    output_path = path or os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return
    if isinstance(value, bool):
        value = str(value).lower()
    with Path(output_path).open("a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
