"""Unit tests for LocalObjectStorage."""

import pytest

from travel_admin.infrastructure.storage.local_file_storage import LocalObjectStorage


@pytest.mark.asyncio
async def test_put_and_delete(tmp_path):
    storage = LocalObjectStorage(tmp_path)

    url = await storage.put("profileImages/uid-1", b"\x89PNG", "image/png")

    stored = tmp_path / "profileImages" / "uid-1"
    assert stored.read_bytes() == b"\x89PNG"
    assert url == stored.resolve().as_uri()
    assert await storage.delete("profileImages/uid-1") is True
    assert await storage.delete("profileImages/uid-1") is False


@pytest.mark.asyncio
async def test_keys_cannot_escape_root(tmp_path):
    storage = LocalObjectStorage(tmp_path / "root")

    await storage.put("../../etc/passwd", b"x")

    assert not (tmp_path / "etc").exists()
    assert any((tmp_path / "root").rglob("passwd"))


def test_base_url(tmp_path):
    storage = LocalObjectStorage(tmp_path, base_url="https://cdn.agency.ma/media/")

    assert storage.url_for("profileImages/uid-1") == "https://cdn.agency.ma/media/profileImages/uid-1"
