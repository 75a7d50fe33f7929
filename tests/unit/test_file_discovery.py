import pytest
from pathlib import Path
from image_optimizer.processing.file_discovery import scan_directory, filter_extensions, get_extension
from image_optimizer.exceptions import (
    EmptyDirectoryError,
    FileAccessError,
    NotADirectoryPathError,
)

@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory with some dummy files."""
    d = tmp_path / "photos"
    d.mkdir()
    (d / "cat.jpg").write_bytes(b"jpg content")
    (d / "dog.png").write_bytes(b"png content")
    (d / "notes.txt").write_text("not an image", encoding="utf-8")
    return d

@pytest.mark.asyncio
async def test_scan_directory_lists_all_entries(temp_dir):
    """Should return every entry, regardless of extension."""
    entries = await scan_directory(temp_dir)

    assert sorted(entries) == ["cat.jpg", "dog.png", "notes.txt"]

@pytest.mark.asyncio
async def test_scan_directory_is_not_recursive(temp_dir):
    """Subdirectories are listed as entries, their contents are not."""
    sub = temp_dir / "nested"
    sub.mkdir()
    (sub / "deep.jpg").write_bytes(b"x")

    entries = await scan_directory(temp_dir)

    assert "nested" in entries
    assert "deep.jpg" not in entries

@pytest.mark.asyncio
async def test_scan_directory_rejects_file(temp_dir):
    """Should fail if the path is a regular file."""
    with pytest.raises(NotADirectoryPathError):
        await scan_directory(temp_dir / "cat.jpg")

@pytest.mark.asyncio
async def test_scan_directory_missing_dir():
    """Should raise FileAccessError and keep the OS error as cause."""
    with pytest.raises(FileAccessError) as exc_info:
        await scan_directory(Path("/non/existent/path"))

    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert exc_info.value.path == Path("/non/existent/path")

@pytest.mark.asyncio
async def test_scan_empty_directory_returns_empty_list(tmp_path):
    """Scanning itself does not judge emptiness; filtering does."""
    assert await scan_directory(tmp_path) == []

def test_filter_keeps_allowed_in_order():
    entries = ["b.png", "a.txt", "c.jpg", "d.jpg"]

    assert filter_extensions(entries, {"jpg", "png"}) == ["b.png", "c.jpg", "d.jpg"]

def test_filter_empty_input_fails():
    """An empty directory is reported as an error."""
    with pytest.raises(EmptyDirectoryError):
        filter_extensions([], {"jpg"})

def test_filter_no_match_returns_empty():
    """A directory with only disallowed files is not an error."""
    assert filter_extensions(["a.txt"], {"jpg"}) == []

def test_filter_uses_last_dot():
    assert filter_extensions(["archive.jpg.txt", "photo.final.jpg"], {"jpg"}) == ["photo.final.jpg"]

def test_filter_name_without_dot_is_its_own_extension():
    """'jpg' with no dot is treated as having extension 'jpg'."""
    assert filter_extensions(["jpg", "README"], {"jpg"}) == ["jpg"]

def test_filter_is_case_sensitive():
    assert filter_extensions(["LOUD.JPG", "quiet.jpg"], {"jpg"}) == ["quiet.jpg"]

def test_get_extension():
    assert get_extension("a.b.c") == "c"
    assert get_extension("noext") == "noext"
    assert get_extension(".hidden") == "hidden"
