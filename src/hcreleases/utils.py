import os
import platform
from datetime import datetime, timezone
from typing import Optional, Tuple

DEFAULT_BASE_URL = "https://api.releases.hashicorp.com/v1"
BASE_URL_ENV = "RELEASES_URL"

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def get_platform_info() -> Tuple[str, str]:
    """Returns the OS and architecture, named the way release builds are."""
    system = platform.system().lower()
    machine = platform.machine().lower()

    # Normalize architecture
    if machine in ["x86_64", "amd64"]:
        machine = "amd64"
    elif machine in ["aarch64", "arm64"]:
        machine = "arm64"
    elif machine in ["i386", "i686", "x86"]:
        machine = "386"

    return system, machine


def get_base_url_from_env() -> Optional[str]:
    """Returns the base URL override from RELEASES_URL, or None when unset or empty."""
    url = os.environ.get(BASE_URL_ENV, "").strip()
    return url or None


def utc_now_rfc3339() -> str:
    return datetime.now(timezone.utc).strftime(RFC3339_FORMAT)


def parse_rfc3339(value: Optional[str]) -> Optional[datetime]:
    """
    Parses an RFC3339 timestamp such as '2021-06-02T11:07:50.000Z'.
    Returns None for empty input; raises ValueError for malformed input.
    """
    if not value:
        return None
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
