import pytest
from conftest import make_sentence, make_word

from samba.data import COMMON_VERBS
from samba.models import Example, StaticVerb
from samba.session import DeckSource, DeckState, EntryCard, FlashcardDeck, NotebookSet, VerbCard

CATALOG = (
    StaticVerb("falar", "说话", "ar", (Example("Eu falo.", "我说。"),)),
    StaticVerb("comer", "吃", "er"),
    StaticVerb("beber", "喝", "er"),
    StaticVerb("abrir", "打开", "ir"),
)


def _deck(*terms: str) -> FlashcardDeck:
    notebook = NotebookSet()
    for term in reversed(terms):
        notebook.toggle(make_word(term))
    return FlashcardDeck(notebook, catalog=CATALOG)


def test_empty_notebook_is_empty_state_and_navigation_is_noop() -> None:
    deck = _deck()
    assert deck.state is DeckState.EMPTY
    assert deck.current is None
    deck.next()
    deck.previous()
    deck.flip()
    assert deck.index == 0
    assert deck.flipped is False
    assert deck.position == "0 / 0"


def test_next_wraps_to_first() -> None:
    deck = _deck("a", "b", "c")
    deck.index = deck.count - 1
    deck.next()
    assert deck.index == 0


def test_previous_wraps_to_last() -> None:
    deck = _deck("a", "b", "c")
    deck.previous()
    assert deck.index == 2
    assert deck.current.front_label() == "c"


def test_navigation_turns_card_face_up() -> None:
    deck = _deck("a", "b")
    deck.flip()
    assert deck.flipped is True
    deck.next()
    assert deck.flipped is False
    deck.flip()
    deck.previous()
    assert deck.flipped is False


@pytest.mark.parametrize("change", [
    lambda d: d.set_source(DeckSource.VERBS),
    lambda d: d.set_source(DeckSource.NOTEBOOK),
    lambda d: d.set_filter("er"),
    lambda d: d.set_filter("ALL"),
])
def test_source_or_filter_change_resets_cursor(change) -> None:
    deck = _deck("a", "b", "c")
    deck.next()
    deck.flip()
    change(deck)
    assert deck.index == 0
    assert deck.flipped is False


def test_verb_filter_is_case_normalized() -> None:
    deck = _deck()
    deck.set_source(DeckSource.VERBS)
    assert deck.count == 4
    deck.set_filter("Er")
    assert [c.front_label() for c in deck.cards] == ["comer", "beber"]
    deck.set_filter("ir")
    assert [c.front_label() for c in deck.cards] == ["abrir"]


def test_unknown_filter_is_rejected() -> None:
    deck = _deck()
    with pytest.raises(ValueError):
        deck.set_filter("or")


def test_notebook_source_is_live() -> None:
    deck = _deck("a")
    assert deck.count == 1
    deck.notebook.toggle(make_word("b"))
    assert deck.count == 2
    assert deck.current.front_label() == "b"


def test_sync_clamps_cursor_after_unsave() -> None:
    deck = _deck("a", "b", "c")
    deck.index = 2
    deck.notebook.toggle(make_word("c"))
    deck.sync()
    assert deck.index == 1
    assert deck.current.front_label() == "b"


def test_back_translation_priority() -> None:
    sentence = EntryCard(make_sentence("Bom dia!", translation="早上好！"))
    word = EntryCard(make_word("casa", definition="房子"))
    verb = VerbCard(CATALOG[0])
    assert sentence.back_translation() == "早上好！"
    assert word.back_translation() == "房子"
    assert verb.back_translation() == "说话"


def test_front_label_and_audio_text() -> None:
    word = EntryCard(make_word("casa"))
    verb = VerbCard(CATALOG[0])
    assert word.front_label() == "casa"
    assert verb.front_label() == "falar"
    assert verb.audio_text() == "falar"


def test_example_sentences_per_source() -> None:
    word = EntryCard(make_word("casa", examples=[{"pt": "Minha casa.", "cn": "我的家。"}]))
    sentence = EntryCard(make_sentence("Bom dia!"))
    assert word.example_sentences()[0].pt == "Minha casa."
    assert sentence.example_sentences() == []
    assert VerbCard(CATALOG[0]).example_sentences()[0].cn == "我说。"
    assert VerbCard(CATALOG[1]).example_sentences() == []


def test_default_catalog_has_all_verb_types() -> None:
    deck = FlashcardDeck(NotebookSet())
    deck.set_source(DeckSource.VERBS)
    assert deck.count == len(COMMON_VERBS)
    for verb_type in ("ar", "er", "ir"):
        deck.set_filter(verb_type)
        assert deck.count > 0
