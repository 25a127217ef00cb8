import http.cookiejar
import logging
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import requests

from .errors import APIError, ResponseDecodeError, UnknownAPIError
from .models import (
    ProductResponse,
    Release,
    ReleaseOptions,
    ReleasesResponse,
    parse_products,
    parse_releases,
)
from .utils import DEFAULT_BASE_URL, get_base_url_from_env, utc_now_rfc3339

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 60.0
DEFAULT_LIMIT = 10
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class ReleasesClient:
    """Client for the HashiCorp Releases API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        validate_base_url(self.base_url)
        self.timeout = timeout

        self.session = session or requests.Session()
        # Never store or replay cookies between calls
        self.session.cookies.set_policy(http.cookiejar.DefaultCookiePolicy(allowed_domains=[]))

    @classmethod
    def from_env(cls, **kwargs) -> "ReleasesClient":
        """Creates a client, taking the base URL from RELEASES_URL when it is set."""
        return cls(base_url=get_base_url_from_env(), **kwargs)

    def close(self):
        self.session.close()

    def __enter__(self) -> "ReleasesClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def get_products(self) -> ProductResponse:
        """Fetches the names of all HashiCorp products."""
        request = self._new_request(f"{self.base_url}/products")
        return self._send_request(request, parse_products)

    def get_releases(self, product: str, options: Optional[ReleaseOptions] = None) -> ReleasesResponse:
        """
        Fetches metadata for multiple releases of a product.
        Results are paginated and ordered by creation time, newest first.
        """
        url = f"{self.base_url}/releases/{quote(product, safe='')}"
        full_url = encode_release_options(url, options or ReleaseOptions())
        request = self._new_request(full_url)
        return self._send_request(request, parse_releases)

    def get_release_metadata(self, product: str, version: str) -> Release:
        """Fetches all metadata for a single product release."""
        url = f"{self.base_url}/releases/{quote(product, safe='')}/{quote(version, safe='')}"
        request = self._new_request(url)
        return self._send_request(request, Release.from_api_response)

    def _new_request(self, url: str) -> requests.Request:
        return requests.Request("GET", url, headers={"Content-Type": JSON_CONTENT_TYPE})

    def _send_request(self, request: requests.Request, parse: Callable[[Any], T]) -> T:
        """
        Sends a request that already carries its Content-Type header and
        decodes the body with parse. Only a 200 status counts as success.
        """
        request.headers["Accept"] = JSON_CONTENT_TYPE
        prepared = self.session.prepare_request(request)

        logger.debug("GET %s", prepared.url)
        with self.session.send(prepared, timeout=self.timeout) as response:
            logger.debug("GET %s -> %d", prepared.url, response.status_code)

            if response.status_code != 200:
                try:
                    body = response.json()
                except ValueError:
                    raise UnknownAPIError(response.status_code) from None
                # A JSON null body decodes to an empty error
                if body is None:
                    body = {}
                if isinstance(body, dict):
                    raise APIError(str(body.get("message") or ""), response.status_code)
                raise UnknownAPIError(response.status_code)

            try:
                return parse(response.json())
            except (ValueError, TypeError, AttributeError) as e:
                raise ResponseDecodeError(e) from e


def encode_release_options(url: str, options: ReleaseOptions) -> str:
    """
    Appends limit, after and (when set) license_class to url.
    Unset limit defaults to 10 and unset after to the current UTC time.
    """
    limit = options.limit or DEFAULT_LIMIT
    after = options.after or utc_now_rfc3339()

    parts = urlsplit(url)
    params = [("limit", str(limit)), ("after", after)]
    if options.license_class:
        params.append(("license_class", options.license_class))

    query = urlencode(params, safe=":")
    if parts.query:
        query = f"{parts.query}&{query}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def validate_base_url(url: str):
    """Rejects base URLs that are not absolute http(s) URLs, before any request is built."""
    parts = urlsplit(url)
    if not parts.scheme:
        raise requests.exceptions.MissingSchema(f"Invalid base URL {url!r}: no scheme supplied")
    if parts.scheme not in ("http", "https"):
        raise requests.exceptions.InvalidSchema(f"Invalid base URL {url!r}: unsupported scheme {parts.scheme!r}")
    if not parts.netloc:
        raise requests.exceptions.InvalidURL(f"Invalid base URL {url!r}: no host supplied")
