"""shared fixtures: an in-memory catalog served through httpx.MockTransport."""
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stencil.catalog.transport import CatalogTransport
from stencil.sources.catalog import API_BASE_URL, RemoteCatalogPackageSource

ARCHIVE_BYTES = b"PK\x03\x04 fake template archive"


def catalog_routes():
    """path -> (status, json body) for the repository 'myrepo'."""
    return {
        "/api/v1/repos/myrepo": (200, {"name": "myrepo", "owner": "tester", "package_count": 4}),
        "/api/v1/repos/myrepo/packages": (200, [
            {"name": "foo-template", "linked": False},
            {"name": "plugin-support", "linked": False},
            {"name": "baz-template", "linked": False},
            {"name": "template-tools", "linked": False},
        ]),
        "/api/v1/packages/myrepo/foo-template": (200, {
            "name": "foo-template",
            "repo": "myrepo",
            "owner": "tester",
            "desc": "A foo generator",
            "desc_url": "https://example.com/foo",
            "latest_version": "1.2",
            "versions": ["1.0", "1.1", "1.2"],
        }),
        "/api/v1/packages/myrepo/plain-template": (200, {
            "name": "plain-template",
            "owner": None,
            "desc": "",
            "latest_version": "0.3",
            "versions": ["0.3"],
        }),
        "/api/v1/packages/myrepo/baz-template": (200, {
            "name": "baz-template",
            "latest_version": None,
            "versions": ["0.1"],
        }),
        "/api/v1/packages/myrepo/broken-template": (500, {"message": "internal error"}),
        "/api/v1/packages/myrepo/secret-template": (403, {"message": "forbidden"}),
    }


class FakeCatalog:
    """records requests and answers them from a route table."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == "dl.bintray.com":
            if request.url.path.endswith("-template-1.2.zip"):
                return httpx.Response(200, content=ARCHIVE_BYTES)
            return httpx.Response(404, content=b"not found")

        if request.url.path in self.routes:
            status, body = self.routes[request.url.path]
            return httpx.Response(status, json=body)
        return httpx.Response(404, json={"message": "Package was not found"})


@pytest.fixture
def fake_catalog():
    return FakeCatalog(catalog_routes())


@pytest.fixture
def catalog_transport(fake_catalog):
    transport = CatalogTransport(API_BASE_URL, transport=httpx.MockTransport(fake_catalog))
    yield transport
    transport.close()


@pytest.fixture
def source(catalog_transport):
    return RemoteCatalogPackageSource("myrepo", catalog_transport)
