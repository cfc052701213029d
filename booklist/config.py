import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_IMAGE_URL = "https://m.media-amazon.com/images/I/71ZB18P3inL._SY522_.jpg"
DEFAULT_CATEGORIES = "Fiction,Non-Fiction,Science,History,Biography,Fantasy,Mystery"


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_list(name: str, default: str) -> List[str]:
    return _split_list(os.getenv(name, default)) or _split_list(default)


@dataclass
class Settings:
    # Storage
    db_file: str = os.getenv("BOOKLIST_DB_FILE", "booklist.db")
    storage_key: str = os.getenv("BOOKLIST_STORAGE_KEY", "domBookAppBooks")

    # Book list behaviour
    image_url: str = os.getenv("BOOKLIST_IMAGE_URL", DEFAULT_IMAGE_URL)
    categories: List[str] = field(default_factory=lambda: _env_list("BOOKLIST_CATEGORIES", DEFAULT_CATEGORIES))
    # Off by default: a sort only lasts for the current session
    persist_sort: bool = _env_flag("BOOKLIST_PERSIST_SORT")

    # Output
    log_level: str = os.getenv("BOOKLIST_LOG_LEVEL", "WARNING")
    output_mode: str = os.getenv("BOOKLIST_OUTPUT", "plain")
    app_name: str = os.getenv("BOOKLIST_APP_NAME", "Book List")


settings = Settings()
