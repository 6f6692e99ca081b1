import pytest

from remote_replace.exceptions import FetchError, WriteError
from remote_replace.transfer.downloader import Downloader


@pytest.mark.asyncio
async def test_replace_overwrites_file(remote, tmp_path):
    target = tmp_path / "a.txt"
    target.write_bytes(b"old contents that are longer than the new ones")
    remote.files["/files/a.txt"] = b"new"

    async with Downloader() as downloader:
        written = await downloader.replace(remote.url("/files/a.txt"), str(target))

    assert written == 3
    assert target.read_bytes() == b"new"


@pytest.mark.asyncio
async def test_http_error_leaves_file_untouched(remote, tmp_path):
    target = tmp_path / "missing.txt"
    target.write_bytes(b"keep me")
    url = remote.url("/files/missing.txt")

    async with Downloader() as downloader:
        with pytest.raises(FetchError) as exc_info:
            await downloader.replace(url, str(target))

    assert "404" in exc_info.value.message
    assert exc_info.value.url == url
    assert exc_info.value.path == str(target)
    assert target.read_bytes() == b"keep me"


@pytest.mark.asyncio
async def test_unsupported_url_is_a_fetch_error(tmp_path):
    target = tmp_path / "a.txt"
    target.write_bytes(b"keep me")

    async with Downloader() as downloader:
        with pytest.raises(FetchError):
            await downloader.replace("ftp://example.invalid/a.txt", str(target))

    assert target.read_bytes() == b"keep me"


@pytest.mark.asyncio
async def test_write_failure_is_a_write_error(remote, tmp_path):
    remote.files["/files/dir"] = b"body"
    target = tmp_path / "dir"
    target.mkdir()

    async with Downloader() as downloader:
        with pytest.raises(WriteError) as exc_info:
            await downloader.replace(remote.url("/files/dir"), str(target))

    assert exc_info.value.path == str(target)


@pytest.mark.asyncio
async def test_vanished_file_is_not_recreated(remote, tmp_path):
    remote.files["/files/gone.txt"] = b"body"
    target = tmp_path / "gone.txt"

    async with Downloader() as downloader:
        with pytest.raises(WriteError) as exc_info:
            await downloader.replace(remote.url("/files/gone.txt"), str(target))

    assert exc_info.value.path == str(target)
    assert not target.exists()


@pytest.mark.asyncio
async def test_fetch_requires_open_session(tmp_path):
    downloader = Downloader()
    with pytest.raises(RuntimeError):
        await downloader.fetch("http://localhost/a", str(tmp_path / "a"))
