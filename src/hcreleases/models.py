"""Release metadata models.

All models are frozen and built fresh from each API response; list-valued
fields are stored as tuples so a decoded response cannot be mutated.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .utils import get_platform_info, parse_rfc3339

LICENSE_CLASS_ENTERPRISE = "enterprise"
LICENSE_CLASS_OSS = "oss"

STATE_SUPPORTED = "supported"
STATE_UNSUPPORTED = "unsupported"
STATE_WITHDRAWN = "withdrawn"


@dataclass(frozen=True)
class ReleaseOptions:
    """
    Pagination and filter options for listing releases.

    limit is the number of results returned (the API allows at most 20).
    after is an RFC3339 timestamp; only releases created before it are
    returned. To fetch the next page, set it to the timestamp_created of the
    oldest release on the current page.
    license_class is "enterprise" or "oss".
    None, zero and empty values fall back to the defaults.
    """

    limit: Optional[int] = None
    after: Optional[str] = None
    license_class: Optional[str] = None


@dataclass(frozen=True)
class Build:
    """A released binary for one os/arch combination."""

    arch: str
    os: str
    unsupported: bool
    url: str

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Build":
        return cls(
            arch=data.get("arch") or "",
            os=data.get("os") or "",
            unsupported=bool(data.get("unsupported")),
            url=data.get("url") or "",
        )


@dataclass(frozen=True)
class Status:
    state: str
    timestamp_updated: Optional[datetime] = None
    # Set by the API when state is "withdrawn"
    message: str = ""

    @classmethod
    def from_api_response(cls, data: Optional[Dict[str, Any]]) -> "Status":
        data = data or {}
        return cls(
            state=data.get("state") or "",
            timestamp_updated=parse_rfc3339(data.get("timestamp_updated")),
            message=data.get("message") or "",
        )


@dataclass(frozen=True)
class Release:
    """A single product release and its metadata."""

    name: str
    version: str
    license_class: str = ""
    is_prerelease: bool = False
    status: Status = field(default_factory=lambda: Status(state=""))
    builds: Tuple[Build, ...] = ()
    # Docker image in the form name:tag
    docker_name_tag: str = ""
    timestamp_created: str = ""
    # Does not move when the release status changes; see status.timestamp_updated
    timestamp_updated: str = ""
    # Patch releases usually point at the blog post of their parent release
    url_blogpost: str = ""
    url_changelog: str = ""
    url_docker_registry_dockerhub: str = ""
    url_docker_registry_ecr: str = ""
    url_license: str = ""
    url_project_website: str = ""
    url_release_notes: str = ""
    url_shasums: str = ""
    # Detached signatures of the url_shasums file
    url_shasums_signatures: Tuple[str, ...] = ()
    # Empty for enterprise products
    url_source_repository: str = ""

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Release":
        """Create a Release from a releases API response object."""
        return cls(
            name=data.get("name") or "",
            version=data.get("version") or "",
            license_class=data.get("license_class") or "",
            is_prerelease=bool(data.get("is_prerelease")),
            status=Status.from_api_response(data.get("status")),
            builds=tuple(Build.from_api_response(b) for b in data.get("builds") or []),
            docker_name_tag=data.get("docker_name_tag") or "",
            timestamp_created=data.get("timestamp_created") or "",
            timestamp_updated=data.get("timestamp_updated") or "",
            url_blogpost=data.get("url_blogpost") or "",
            url_changelog=data.get("url_changelog") or "",
            url_docker_registry_dockerhub=data.get("url_docker_registry_dockerhub") or "",
            url_docker_registry_ecr=data.get("url_docker_registry_ecr") or "",
            url_license=data.get("url_license") or "",
            url_project_website=data.get("url_project_website") or "",
            url_release_notes=data.get("url_release_notes") or "",
            url_shasums=data.get("url_shasums") or "",
            url_shasums_signatures=tuple(data.get("url_shasums_signatures") or []),
            url_source_repository=data.get("url_source_repository") or "",
        )

    @property
    def is_withdrawn(self) -> bool:
        return self.status.state == STATE_WITHDRAWN

    def build_for(self, os_name: str, arch: str) -> Optional[Build]:
        for build in self.builds:
            if build.os == os_name and build.arch == arch:
                return build
        return None

    def build_for_host(self) -> Optional[Build]:
        """Returns the build matching the running machine, if one was released."""
        system, machine = get_platform_info()
        return self.build_for(system, machine)


ReleasesResponse = Tuple[Release, ...]
ProductResponse = Tuple[str, ...]


def parse_products(data: List[Any]) -> ProductResponse:
    if not isinstance(data, list):
        raise TypeError(f"expected a list of products, got {type(data).__name__}")
    return tuple(str(name) for name in data)


def parse_releases(data: List[Dict[str, Any]]) -> ReleasesResponse:
    if not isinstance(data, list):
        raise TypeError(f"expected a list of releases, got {type(data).__name__}")
    return tuple(Release.from_api_response(item) for item in data)
