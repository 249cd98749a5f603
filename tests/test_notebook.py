from conftest import make_word

from samba.session import HistoryCache, NotebookSet


def test_toggle_saves_then_unsaves() -> None:
    notebook = NotebookSet()
    x = make_word("saudade")
    assert notebook.toggle(x) is True
    assert notebook.entries == [x]
    assert notebook.toggle(x) is False
    assert notebook.entries == []


def test_double_toggle_restores_prior_state() -> None:
    a, b = make_word("a"), make_word("b")
    notebook = NotebookSet([a, b])
    before = notebook.entries
    notebook.toggle(make_word("c"))
    notebook.toggle(make_word("c"))
    assert notebook.entries == before

    notebook.toggle(a)
    notebook.toggle(a)
    assert notebook.terms() == ["a", "b"]


def test_membership_is_case_sensitive() -> None:
    notebook = NotebookSet()
    notebook.toggle(make_word("Casa"))
    assert notebook.contains("Casa") is True
    assert notebook.contains("casa") is False
    notebook.toggle(make_word("casa"))
    assert len(notebook) == 2


def test_toggle_matches_on_term_not_id() -> None:
    notebook = NotebookSet()
    notebook.toggle(make_word("ir"))
    notebook.toggle(make_word("ir"))
    assert len(notebook) == 0


def test_most_recently_saved_first() -> None:
    notebook = NotebookSet()
    for term in ("um", "dois", "três"):
        notebook.toggle(make_word(term))
    assert notebook.terms() == ["três", "dois", "um"]
    assert notebook.terms(limit=2) == ["três", "dois"]


def test_notebook_and_history_are_independent() -> None:
    entry = make_word("gato")
    notebook = NotebookSet()
    history = HistoryCache()
    notebook.toggle(entry)
    history.record(entry)
    history.clear()
    assert notebook.contains("gato")
    notebook.toggle(entry)
    history.record(entry)
    assert len(history) == 1
