import io
import json

import pytest
import requests

from hcreleases.client import ReleasesClient

BASE_URL = "https://releases.test/v1"


def make_response(status_code, body):
    """Builds a real requests.Response carrying body (JSON-encoded unless str/bytes)."""
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response._content_consumed = True
    response.raw = io.BytesIO(body)
    response.encoding = "utf-8"
    return response


class FakeAPI:
    """Stands in for Session.send, recording what was sent."""

    def __init__(self):
        self.sent = []
        self.status_code = 200
        self.body = None
        self.exc = None

    def respond(self, status_code, body):
        self.status_code = status_code
        self.body = body

    def fail(self, exc):
        self.exc = exc

    def send(self, prepared, **kwargs):
        self.sent.append((prepared, kwargs))
        if self.exc is not None:
            raise self.exc
        return make_response(self.status_code, self.body)

    @property
    def last_request(self):
        return self.sent[-1][0]


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def client(fake_api, monkeypatch):
    c = ReleasesClient(base_url=BASE_URL)
    monkeypatch.setattr(c.session, "send", fake_api.send)
    yield c
    c.close()


@pytest.fixture
def release_json():
    return {
        "builds": [
            {
                "arch": "amd64",
                "os": "linux",
                "unsupported": False,
                "url": "https://releases.hashicorp.com/vault/1.2.3/vault_1.2.3_linux_amd64.zip",
            },
            {
                "arch": "arm64",
                "os": "darwin",
                "unsupported": True,
                "url": "https://releases.hashicorp.com/vault/1.2.3/vault_1.2.3_darwin_arm64.zip",
            },
        ],
        "docker_name_tag": "vault:1.2.3",
        "is_prerelease": False,
        "license_class": "oss",
        "name": "vault",
        "status": {
            "state": "supported",
            "timestamp_updated": "2021-04-21T20:38:38.000Z",
        },
        "timestamp_created": "2019-09-10T17:39:01.000Z",
        "timestamp_updated": "2019-09-10T17:39:01.000Z",
        "url_blogpost": "https://www.hashicorp.com/blog/vault-1-2",
        "url_changelog": "https://github.com/hashicorp/vault/blob/main/CHANGELOG.md",
        "url_docker_registry_dockerhub": "https://hub.docker.com/_/vault",
        "url_docker_registry_ecr": "https://gallery.ecr.aws/hashicorp/vault",
        "url_license": "https://github.com/hashicorp/vault/blob/main/LICENSE",
        "url_project_website": "https://www.vaultproject.io",
        "url_release_notes": "https://www.vaultproject.io/docs/release-notes",
        "url_shasums": "https://releases.hashicorp.com/vault/1.2.3/vault_1.2.3_SHA256SUMS",
        "url_shasums_signatures": [
            "https://releases.hashicorp.com/vault/1.2.3/vault_1.2.3_SHA256SUMS.sig",
            "https://releases.hashicorp.com/vault/1.2.3/vault_1.2.3_SHA256SUMS.72D7468F.sig",
        ],
        "url_source_repository": "https://github.com/hashicorp/vault",
        "version": "1.2.3",
    }
