from booklist.config import DEFAULT_CATEGORIES, _env_list


def test_env_list_splits_and_trims(monkeypatch):
    monkeypatch.setenv("BOOKLIST_CATEGORIES", " Poetry, Drama ,,")
    assert _env_list("BOOKLIST_CATEGORIES", DEFAULT_CATEGORIES) == ["Poetry", "Drama"]


def test_env_list_falls_back_when_empty(monkeypatch):
    for raw in ("", " , ,"):
        monkeypatch.setenv("BOOKLIST_CATEGORIES", raw)
        assert _env_list("BOOKLIST_CATEGORIES", DEFAULT_CATEGORIES)[0] == "Fiction"
