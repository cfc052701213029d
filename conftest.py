import pytest

from booklist.config import settings
from booklist.database import LocalStore
from booklist.library import BookList
from booklist.storage import BookStorage

IMAGE_URL = "https://example.com/cover.jpg"


@pytest.fixture
def db_file(tmp_path, request):
    # Unique database file per test
    return str(tmp_path / f"test_{request.node.name}.db")


@pytest.fixture
def storage(db_file):
    return BookStorage(LocalStore(db_file), "domBookAppBooks")


@pytest.fixture
def book_list(storage):
    return BookList(storage, image_url=IMAGE_URL, persist_sort=False)


@pytest.fixture
def cli_env(monkeypatch, db_file):
    """Point the CLI at a per-test database and plain output."""
    monkeypatch.setattr(settings, "db_file", db_file)
    monkeypatch.setattr(settings, "image_url", IMAGE_URL)
    monkeypatch.setenv("BOOKLIST_OUTPUT", "plain")
    return db_file
