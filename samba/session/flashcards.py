"""
Flashcard deck over saved entries or the static verb catalog.

Both sources are exposed through the same Card interface so the deck and
whatever renders it never inspect the underlying record shape.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence

from ..data import COMMON_VERBS
from ..models import Entry, Example, SentenceEntry, StaticVerb, WordEntry
from .notebook import NotebookSet


class DeckSource(Enum):
    NOTEBOOK = "NOTEBOOK"
    VERBS = "VERBS"


class DeckState(Enum):
    EMPTY = "EMPTY"
    BROWSING = "BROWSING"


VERB_FILTERS = ("ALL", "AR", "ER", "IR")


# =============================================================================
# CARDS
# =============================================================================

class Card(ABC):
    """What a flashcard shows, independent of where it came from."""
    
    @abstractmethod
    def front_label(self) -> str:
        pass
    
    @abstractmethod
    def back_translation(self) -> str:
        pass
    
    def audio_text(self) -> str:
        """Text read aloud for this card."""
        return self.front_label()
    
    @abstractmethod
    def example_sentences(self) -> List[Example]:
        pass


class EntryCard(Card):
    """Card for a saved word or sentence entry."""
    
    def __init__(self, entry: Entry):
        self.entry = entry
    
    def front_label(self) -> str:
        return self.entry.term
    
    def back_translation(self) -> str:
        # Sentence translation takes priority over a word definition
        if isinstance(self.entry, SentenceEntry):
            return self.entry.sentence_analysis.translation
        if isinstance(self.entry, WordEntry):
            return self.entry.definition
        raise TypeError(f"Unsupported entry type: {type(self.entry).__name__}")
    
    def example_sentences(self) -> List[Example]:
        if isinstance(self.entry, WordEntry):
            return list(self.entry.examples)
        if isinstance(self.entry, SentenceEntry):
            return []
        raise TypeError(f"Unsupported entry type: {type(self.entry).__name__}")


class VerbCard(Card):
    """Card for a catalog verb."""
    
    def __init__(self, verb: StaticVerb):
        self.verb = verb
    
    def front_label(self) -> str:
        return self.verb.word
    
    def back_translation(self) -> str:
        return self.verb.cn
    
    def example_sentences(self) -> List[Example]:
        return list(self.verb.examples)


# =============================================================================
# DECK
# =============================================================================

class FlashcardDeck:
    """
    Transient cursor over the active card source.
    
    The notebook source is read live, so saving or unsaving entries is
    reflected immediately. Changing the source or the verb filter puts the
    cursor back on the first card, face up.
    
    Usage:
        deck = FlashcardDeck(notebook)
        deck.set_source(DeckSource.VERBS)
        deck.set_filter("er")
        card = deck.current
    """
    
    def __init__(self, notebook: NotebookSet, catalog: Sequence[StaticVerb] = COMMON_VERBS):
        self.notebook = notebook
        self.catalog = catalog
        self.source = DeckSource.NOTEBOOK
        self.verb_filter = "ALL"
        self.index = 0
        self.flipped = False
    
    def _reset(self) -> None:
        self.index = 0
        self.flipped = False
    
    def set_source(self, source: DeckSource) -> None:
        self.source = DeckSource(source)
        self._reset()
    
    def set_filter(self, verb_type: str) -> None:
        """
        Restrict the verb source to one conjugation class.
        
        Args:
            verb_type: "ALL", "AR", "ER" or "IR" (any case)
            
        Raises:
            ValueError: For an unknown filter
        """
        normalized = str(verb_type).strip().upper()
        if normalized not in VERB_FILTERS:
            raise ValueError(f"Unknown verb filter: {verb_type!r}")
        self.verb_filter = normalized
        self._reset()
    
    @property
    def cards(self) -> List[Card]:
        if self.source is DeckSource.NOTEBOOK:
            return [EntryCard(e) for e in self.notebook]
        if self.source is DeckSource.VERBS:
            return [
                VerbCard(v) for v in self.catalog
                if self.verb_filter == "ALL" or v.type == self.verb_filter.lower()
            ]
        raise ValueError(f"Unknown deck source: {self.source!r}")
    
    @property
    def count(self) -> int:
        return len(self.cards)
    
    @property
    def state(self) -> DeckState:
        return DeckState.EMPTY if self.count == 0 else DeckState.BROWSING
    
    @property
    def current(self) -> Optional[Card]:
        cards = self.cards
        if not cards:
            return None
        return cards[min(self.index, len(cards) - 1)]
    
    @property
    def position(self) -> str:
        """Human-readable "n / total" counter."""
        count = self.count
        return f"{self.index + 1 if count else 0} / {count}"
    
    def sync(self) -> None:
        """Clamp the cursor after the live source shrank."""
        count = self.count
        if count == 0:
            self._reset()
        elif self.index >= count:
            self.index = count - 1
            self.flipped = False
    
    def next(self) -> None:
        count = self.count
        if count == 0:
            return
        self.index = (self.index + 1) % count
        self.flipped = False
    
    def previous(self) -> None:
        count = self.count
        if count == 0:
            return
        self.index = (self.index - 1 + count) % count
        self.flipped = False
    
    def flip(self) -> None:
        if self.count == 0:
            return
        self.flipped = not self.flipped
