"""Unit tests for the local form store."""

import os
import re

import pytest

from bindery.interfaces.form_store import FormNotFoundError, InvalidFormNameError
from bindery.strategies.form_stores import LocalFormStore


@pytest.fixture
def store(tmp_path):
    """Create a store in a directory that does not exist yet."""
    return LocalFormStore(tmp_path / "forms")


class TestLocalFormStore:
    """Test suite for LocalFormStore."""

    def test_save_creates_directory_and_file(self, store):
        """Test that save writes <8 hex>.json and returns its name."""
        name = store.save('{"title": "Hi"}')
        assert re.fullmatch(r"[0-9a-f]{8}\.json", name)
        assert (store.directory / name).read_text(encoding="utf-8") == '{"title": "Hi"}'

    def test_list_names_sorted(self, store):
        """Test that saved names are listed in sorted order."""
        names = [store.save("{}") for _ in range(3)]
        assert store.list_names() == sorted(names)

    def test_list_ignores_other_files(self, store):
        """Test that only .json files are listed."""
        name = store.save("{}")
        (store.directory / "notes.txt").write_text("x", encoding="utf-8")
        assert store.list_names() == [name]

    def test_list_missing_directory(self, store):
        """Test that a missing directory lists nothing."""
        assert store.list_names() == []

    def test_load(self, store):
        """Test loading a saved input by name."""
        name = store.save('{"a": 1}')
        assert store.load(name) == '{"a": 1}'

    def test_load_latest(self, store):
        """Test that latest returns the most recently modified input."""
        older = store.save('{"n": 1}')
        newer = store.save('{"n": 2}')
        stat = (store.directory / older).stat()
        os.utime(store.directory / older, ns=(stat.st_atime_ns, stat.st_mtime_ns - 10_000_000_000))
        assert store.load("latest") == store.load(newer)

    def test_load_latest_empty(self, store):
        """Test that latest with no inputs is not found."""
        with pytest.raises(FormNotFoundError, match="No files found"):
            store.load("latest")

    def test_load_missing(self, store):
        """Test that an unknown name is not found."""
        with pytest.raises(FormNotFoundError, match="File not found: abc.json"):
            store.load("abc.json")

    @pytest.mark.parametrize("name", ["../secret.json", "a/b.json", "a\\b.json", ".."])
    def test_load_rejects_path_components(self, store, name):
        """Test that names that could leave the directory are rejected."""
        with pytest.raises(InvalidFormNameError):
            store.load(name)
