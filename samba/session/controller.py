"""
Session controller - the single owner of all learning-session state.

Every mutating operation runs to completion synchronously around at most
one await on an external backend, then persists the collection it changed
before returning.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..config import Config
from ..models import Entry, Story
from ..services.errors import CompositionError, ResolutionError, SynthesisError
from ..utils.parsing import TextParser
from .chat import ChatSession
from .flashcards import DeckSource, FlashcardDeck
from .history import HistoryCache
from .notebook import NotebookSet
from .persistence import KeyValueStore, PersistenceAdapter
from .story_log import StoryLog

if TYPE_CHECKING:
    from ..services.ai_service import AIService
    from ..services.speech_service import SpeechService

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    SEARCH = "SEARCH"
    NOTEBOOK = "NOTEBOOK"
    FLASHCARDS = "FLASHCARDS"
    STORY = "STORY"


@dataclass
class SessionState:
    """Everything a front end needs to render the session."""
    
    view: ViewMode = ViewMode.SEARCH
    search_term: str = ""
    current_entry: Optional[Entry] = None
    story: Optional[Story] = None
    notice: Optional[str] = None
    
    # Independent in-flight flags, one per operation class
    loading_entry: bool = False
    loading_story: bool = False
    playing_audio: bool = False
    
    notebook: NotebookSet = field(default_factory=NotebookSet)
    history: HistoryCache = field(default_factory=HistoryCache)
    story_log: StoryLog = field(default_factory=StoryLog)
    deck: Optional[FlashcardDeck] = None
    
    def __post_init__(self) -> None:
        if self.deck is None:
            self.deck = FlashcardDeck(self.notebook)


class SessionController:
    """
    Orchestrates lookups, the notebook, stories and flashcards.
    
    Usage:
        controller = SessionController(ai, JsonFileStore(), speech=SpeechService())
        controller.start()
        await controller.search("saudade")
        controller.toggle_save()
    """
    
    STORY_TOO_FEW = "Save at least 3 words to generate a story!"
    LOOKUP_FAILED = "Something went wrong. Please check your API key or try again."
    STORY_FAILED = "Failed to generate story"
    
    def __init__(
        self,
        resolver: "AIService",
        store: KeyValueStore,
        composer: Optional["AIService"] = None,
        speech: Optional["SpeechService"] = None,
    ):
        """
        Initialize the controller.
        
        Args:
            resolver: Backend providing resolve_entry() and answer_chat()
            store: Durable key-value store for the collections
            composer: Backend providing compose_story(); defaults to resolver
            speech: Backend providing synthesize(); audio is disabled if None
        """
        self.resolver = resolver
        self.composer = composer or resolver
        self.speech = speech
        self.persistence = PersistenceAdapter(store)
        self.state = SessionState()
        self._lookup_seq = 0
        self._audio_pending = 0
    
    def start(self) -> SessionState:
        """Rehydrate the stored collections."""
        notebook = self.persistence.load_notebook()
        self.state.notebook = notebook
        self.state.history = self.persistence.load_history()
        self.state.story_log = self.persistence.load_story_log()
        self.state.deck = FlashcardDeck(notebook)
        logger.info(
            "Session started: %d saved, %d in history, %d stories",
            len(self.state.notebook), len(self.state.history), len(self.state.story_log),
        )
        return self.state
    
    # =========================================================================
    # LOOKUP
    # =========================================================================
    
    async def search(self, query: str) -> Optional[Entry]:
        """
        Resolve ``query`` and make it the current entry.
        
        On failure a notice is set and no state changes. A reply that
        arrives after a newer search was started is discarded.
        
        Returns:
            The resolved entry, or None if blank, failed or superseded
        """
        if not TextParser.normalize_query(query):
            return None
        
        state = self.state
        self._lookup_seq += 1
        seq = self._lookup_seq
        
        state.view = ViewMode.SEARCH
        state.story = None
        state.search_term = query
        state.notice = None
        state.loading_entry = True
        
        try:
            entry = await self.resolver.resolve_entry(query)
        except ResolutionError as e:
            if seq == self._lookup_seq:
                logger.error("Lookup failed for %r: %s", query, e)
                state.notice = self.LOOKUP_FAILED
                state.loading_entry = False
            return None
        
        if seq != self._lookup_seq:
            logger.debug("Discarding superseded lookup for %r", query)
            return None
        
        state.loading_entry = False
        state.current_entry = entry
        state.history.record(entry)
        self.persistence.save_history(state.history)
        return entry
    
    def open_history_item(self, entry: Entry) -> None:
        """Show a stored entry again without resolving it."""
        self.state.current_entry = entry
        self.state.search_term = entry.search_text
        self.state.view = ViewMode.SEARCH
    
    def clear_search(self) -> None:
        self.state.search_term = ""
        self.state.current_entry = None
    
    def clear_history(self) -> None:
        self.state.history.clear()
        self.persistence.save_history(self.state.history)
    
    # =========================================================================
    # NOTEBOOK
    # =========================================================================
    
    def is_saved(self) -> bool:
        entry = self.state.current_entry
        return entry is not None and self.state.notebook.contains(entry.term)
    
    def toggle_save(self) -> bool:
        """
        Save or unsave the current entry.
        
        Returns:
            True if the current entry is saved after the call
        """
        entry = self.state.current_entry
        if entry is None:
            return False
        saved = self.state.notebook.toggle(entry)
        self.state.deck.sync()
        self.persistence.save_notebook(self.state.notebook)
        return saved
    
    # =========================================================================
    # STORIES
    # =========================================================================
    
    async def generate_story(self) -> Optional[Story]:
        """
        Compose a story from the most recently saved terms.
        
        Requires at least three saved entries; uses at most ten.
        
        Returns:
            The new story, or None if rejected or failed
        """
        state = self.state
        if len(state.notebook) < Config.STORY_MIN_WORDS:
            state.notice = self.STORY_TOO_FEW
            return None
        
        terms = state.notebook.terms(limit=Config.STORY_MAX_WORDS)
        state.notice = None
        state.loading_story = True
        try:
            story = await self.composer.compose_story(terms)
        except CompositionError as e:
            logger.error("Story generation failed: %s", e)
            state.notice = self.STORY_FAILED
            return None
        finally:
            state.loading_story = False
        
        state.story = story
        state.story_log.append(story)
        self.persistence.save_story_log(state.story_log)
        return story
    
    def open_story(self, story: Story) -> None:
        self.state.story = story
        self.state.view = ViewMode.STORY
    
    # =========================================================================
    # AUDIO
    # =========================================================================
    
    async def play(self, text: str) -> Optional[bytes]:
        """
        Synthesize ``text`` for playback. Best effort: failures are logged.
        
        Returns:
            Audio bytes, or None if unavailable
        """
        if self.speech is None or not text or not text.strip():
            return None
        
        # Overlapping requests share the flag; it clears when the last one ends
        self._audio_pending += 1
        self.state.playing_audio = True
        try:
            return await self.speech.synthesize(text)
        except SynthesisError as e:
            logger.warning("TTS error: %s", e)
            return None
        finally:
            self._audio_pending -= 1
            self.state.playing_audio = self._audio_pending > 0
    
    # =========================================================================
    # NAVIGATION & FLASHCARDS
    # =========================================================================
    
    def set_view(self, view: ViewMode) -> None:
        self.state.view = ViewMode(view)
    
    def set_deck_source(self, source: DeckSource) -> None:
        self.state.deck.set_source(source)
    
    def set_deck_filter(self, verb_type: str) -> None:
        self.state.deck.set_filter(verb_type)
    
    def open_chat(self) -> Optional[ChatSession]:
        """Start a tutor conversation about the current entry."""
        if self.state.current_entry is None:
            return None
        return ChatSession(self.resolver, self.state.current_entry)
