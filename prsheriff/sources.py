"""Loading ignore-authors content from a local file or a remote URL."""
import os
import re
from pathlib import Path

import httpx

from .errors import IgnoreSourceError

URL_PATTERN = re.compile(r'^https?://', re.IGNORECASE)


def is_url(source: str) -> bool:
    return bool(URL_PATTERN.match(source))


def resolve_workspace_path(source: str) -> Path:
    """Resolve a relative path against the CI workspace, if there is one."""
    path = Path(source)
    if path.is_absolute():
        return path
    return Path(os.environ.get("GITHUB_WORKSPACE") or os.getcwd()) / path


def read_local_text(source: str) -> str:
    path = resolve_workspace_path(source)
    if not path.is_file():
        raise IgnoreSourceError(f"Ignore-authors file not found: {path}", source=source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreSourceError(f"Failed to read ignore-authors file {path}: {e}", source=source) from e


async def fetch_remote_text(url: str) -> str:
    """Fetch a remote ignore-authors file in a single attempt."""
    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(url, follow_redirects=True, timeout=10.0)
    except httpx.HTTPError as e:
        raise IgnoreSourceError(f"Failed to fetch ignore-authors file ({e})", source=url) from e

    if not response.is_success:
        raise IgnoreSourceError(
            f"Failed to fetch ignore-authors file ({response.status_code} {response.reason_phrase})",
            source=url,
            status_code=response.status_code,
        )
    return response.text


async def load_text(source: str) -> str:
    """Return the raw text of an ignore-authors source.

    Args:
        source: A local path (relative to the workspace) or an http(s) URL

    Raises:
        IgnoreSourceError: If the file is missing or the fetch fails
    """
    if is_url(source):
        return await fetch_remote_text(source)
    return read_local_text(source)
