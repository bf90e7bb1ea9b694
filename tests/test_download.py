"""Tests for archive downloads and extraction."""
import io
import tarfile
from unittest.mock import MagicMock, patch

import aiohttp
import pytest

from setup_ruby.errors import DownloadError
from setup_ruby.installers.download import download_file, extract_tarball


def mock_session(status=200, chunks=(b"content",)):
    async def iter_chunked(size):
        for chunk in chunks:
            yield chunk

    response = MagicMock()
    response.status = status
    response.reason = "OK" if status == 200 else "Not Found"
    response.content.iter_chunked = iter_chunked
    if status != 200:
        response.raise_for_status.side_effect = aiohttp.ClientResponseError(
            MagicMock(), (), status=status, message=response.reason
        )

    request = MagicMock()
    request.__aenter__.return_value = response

    session = MagicMock()
    session.__aenter__.return_value = session
    session.get.return_value = request
    return session


@pytest.mark.asyncio
async def test_download_file(tmp_path):
    """Test streamed chunks are written to the destination"""
    dest = tmp_path / "ruby.tar.gz"
    session = mock_session(chunks=(b"abc", b"def"))

    with patch("aiohttp.ClientSession", return_value=session):
        result = await download_file("https://example.com/ruby.tar.gz", dest)

    assert result == dest
    assert dest.read_bytes() == b"abcdef"


@pytest.mark.asyncio
async def test_download_file_http_error(tmp_path):
    """Test HTTP errors become download errors and leave no file"""
    dest = tmp_path / "ruby.tar.gz"
    session = mock_session(status=404)

    with patch("aiohttp.ClientSession", return_value=session):
        with pytest.raises(DownloadError, match="Failed to download"):
            await download_file("https://example.com/missing.tar.gz", dest)

    assert not dest.exists()


@pytest.mark.asyncio
async def test_download_file_empty(tmp_path):
    """Test an empty body is rejected"""
    session = mock_session(chunks=())
    with patch("aiohttp.ClientSession", return_value=session):
        with pytest.raises(DownloadError, match="empty"):
            await download_file("https://example.com/ruby.tar.gz", tmp_path / "ruby.tar.gz")


def test_extract_tarball(tmp_path):
    """Test archives extract with executable modes kept"""
    archive = tmp_path / "ruby.tar.gz"
    with tarfile.open(archive, "w:gz") as tf:
        data = b"#!/bin/sh\n"
        info = tarfile.TarInfo("ruby-2.7.2/bin/ruby")
        info.size = len(data)
        info.mode = 0o755
        tf.addfile(info, io.BytesIO(data))

    extract_tarball(archive, tmp_path / "rubies")

    ruby = tmp_path / "rubies" / "ruby-2.7.2" / "bin" / "ruby"
    assert ruby.read_bytes() == b"#!/bin/sh\n"
    assert ruby.stat().st_mode & 0o100


def test_extract_tarball_corrupt(tmp_path):
    """Test unreadable archives fail"""
    archive = tmp_path / "ruby.tar.gz"
    archive.write_bytes(b"not a tarball")
    with pytest.raises(DownloadError):
        extract_tarball(archive, tmp_path / "rubies")
