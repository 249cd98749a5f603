"""Session state and persistence engine."""

from .history import HistoryCache
from .notebook import NotebookSet
from .story_log import StoryLog
from .flashcards import (
    Card,
    DeckSource,
    DeckState,
    EntryCard,
    FlashcardDeck,
    VerbCard,
    VERB_FILTERS,
)
from .persistence import JsonFileStore, KeyValueStore, MemoryStore, PersistenceAdapter
from .chat import ChatSession
from .controller import SessionController, SessionState, ViewMode

__all__ = [
    'HistoryCache',
    'NotebookSet',
    'StoryLog',
    'Card',
    'DeckSource',
    'DeckState',
    'EntryCard',
    'FlashcardDeck',
    'VerbCard',
    'VERB_FILTERS',
    'JsonFileStore',
    'KeyValueStore',
    'MemoryStore',
    'PersistenceAdapter',
    'ChatSession',
    'SessionController',
    'SessionState',
    'ViewMode',
]
