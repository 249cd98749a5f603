from conftest import make_word

from samba.session import HistoryCache


def test_record_prepends() -> None:
    history = HistoryCache()
    history.record(make_word("casa"))
    history.record(make_word("livro"))
    assert [e.term for e in history] == ["livro", "casa"]


def test_duplicate_term_with_different_case_replaces_old_entry() -> None:
    a = make_word("casa")
    b = make_word("livro")
    history = HistoryCache([a, b])
    c = make_word("Casa")
    history.record(c)
    assert history.entries == [c, b]


def test_recording_same_term_twice_keeps_newer_payload() -> None:
    history = HistoryCache()
    first = make_word("mar", definition="old")
    second = make_word("mar", definition="new")
    history.record(first)
    history.record(second)
    assert len(history) == 1
    assert history.entries[0] is second


def test_never_exceeds_limit_and_never_duplicates() -> None:
    history = HistoryCache()
    for i in range(45):
        history.record(make_word(f"palavra{i % 30}" if i % 2 else f"PALAVRA{i % 30}"))
        terms = [e.term.lower() for e in history]
        assert len(terms) <= 20
        assert len(terms) == len(set(terms))
    assert len(history) == 20


def test_refresh_at_capacity_keeps_length() -> None:
    history = HistoryCache()
    for i in range(20):
        history.record(make_word(f"p{i}"))
    e = make_word("novo")
    history.record(e)
    assert len(history) == 20
    e2 = make_word("NOVO")
    history.record(e2)
    assert len(history) == 20
    assert history.entries[0] is e2


def test_most_recent_matching_is_case_insensitive() -> None:
    history = HistoryCache()
    entry = make_word("Pão")
    history.record(entry)
    assert history.most_recent_matching("pão") is entry
    assert history.most_recent_matching("queijo") is None


def test_clear() -> None:
    history = HistoryCache([make_word("a"), make_word("b")])
    history.clear()
    assert len(history) == 0


def test_loaded_entries_are_deduplicated_and_capped() -> None:
    entries = [make_word("a"), make_word("A")] + [make_word(f"w{i}") for i in range(30)]
    history = HistoryCache(entries)
    assert len(history) == 20
    assert history.entries[0] is entries[0]
    assert history.most_recent_matching("a") is entries[0]
