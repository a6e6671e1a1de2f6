"""Check GitHub for a newer release."""

import logging
import re
from typing import Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

GITHUB_REPO = "TechLogicals/LinuxToolbox"
RELEASES_URL = f"https://api.github.com/repos/{GITHUB_REPO}/releases/latest"
UPDATE_TIMEOUT = 5.0
USER_AGENT = "LinuxToolbox"


class UpdateCheckError(Exception):
    """The release check could not produce an answer."""


_VERSION_PATTERN = re.compile(r"^v?(\d+(?:\.\d+)*)$")


def parse_version(text: str) -> Tuple[int, ...]:
    """Parse "v1.2.3" or "1.2.3" into a comparable tuple."""
    match = _VERSION_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Unparsable version: {text!r}")
    return tuple(int(part) for part in match.group(1).split("."))


def check_for_updates(
    current_version: str,
    url: str = RELEASES_URL,
    client: Optional[httpx.Client] = None,
) -> Optional[str]:
    """Return the latest release version if it is newer than current_version.

    Returns None when the latest release is not newer. Network, HTTP, payload
    and version-format problems raise UpdateCheckError.
    """
    try:
        current = parse_version(current_version)
        if client is None:
            response = httpx.get(url, headers={"User-Agent": USER_AGENT}, timeout=UPDATE_TIMEOUT)
        else:
            response = client.get(url, headers={"User-Agent": USER_AGENT}, timeout=UPDATE_TIMEOUT)
        response.raise_for_status()
        tag_name = response.json()["tag_name"]
        if not isinstance(tag_name, str):
            raise ValueError(f"tag_name is not a string: {tag_name!r}")
        latest = parse_version(tag_name)
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.debug("Update check failed: %r", e)
        raise UpdateCheckError(str(e) or e.__class__.__name__) from e

    if latest > current:
        return ".".join(str(part) for part in latest)
    return None
