import io
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from rich.console import Console


class RemoteStub:
    """A local HTTP server serving an in-memory file map, recording raw request paths."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.requests: list[str] = []
        self.server: TestServer | None = None

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.raw_path)
        body = self.files.get(request.path)
        if body is None:
            return web.Response(status=404, text="not found")
        return web.Response(body=body)

    async def start(self) -> None:
        app = web.Application()
        app.router.add_route("GET", "/{tail:.*}", self._handle)
        self.server = TestServer(app)
        await self.server.start_server()

    async def close(self) -> None:
        await self.server.close()

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))


@pytest_asyncio.fixture
async def remote():
    stub = RemoteStub()
    await stub.start()
    yield stub
    await stub.close()


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    root = tmp_path / "images"
    (root / "icons").mkdir(parents=True)
    (root / "logo.png").write_bytes(b"old logo")
    (root / "icons" / "a b.png").write_bytes(b"old icon")
    return root


class NoNetworkDownloader:
    """Stands in for the Downloader and fails the test if a session is ever opened."""

    opened = 0

    def __init__(self, **kwargs):
        pass

    async def __aenter__(self):
        type(self).opened += 1
        raise AssertionError("no HTTP session should be opened")

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


@pytest.fixture
def no_network():
    NoNetworkDownloader.opened = 0
    return NoNetworkDownloader
