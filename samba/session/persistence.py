"""
Persistence layer for the session collections.

The notebook, history and story log are each stored as one JSON array
under its own key in a simple string key-value store. Writes always
replace the whole collection.
"""

import json
import logging
import os
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ..config import Config
from ..models import Story, entry_from_dict
from ..services.errors import PersistenceError
from .history import HistoryCache
from .notebook import NotebookSet
from .story_log import StoryLog

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# STORES
# =============================================================================

class KeyValueStore(ABC):
    """Durable string key-value store."""
    
    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None if absent."""
        pass
    
    @abstractmethod
    def save(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``. Returns True if successful."""
        pass


class MemoryStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""
    
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
    
    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)
    
    def save(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True


class JsonFileStore(KeyValueStore):
    """
    One JSON file per key inside a data directory.
    
    Thread-safe; every save is an atomic write (temp file + rename) so a
    crash mid-write never leaves a truncated file behind.
    """
    
    FILE_PREFIX = "samba_"
    
    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize file store.
        
        Args:
            data_dir: Directory holding the files (defaults to Config.DATA_DIR)
        """
        self.data_dir = Path(data_dir or Config.DATA_DIR)
        self._lock = Lock()
    
    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{self.FILE_PREFIX}{key}.json"
    
    def load(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                return path.read_text(encoding='utf-8')
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read %s: %s", path, e)
                return None
    
    def save(self, key: str, value: str) -> bool:
        path = self.path_for(key)
        temp_file = None
        with self._lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                temp_file = f"{path}.{uuid.uuid4().hex[:8]}.tmp"
                with open(temp_file, 'w', encoding='utf-8') as f:
                    f.write(value)
                os.replace(temp_file, path)
                temp_file = None
                return True
            except OSError as e:
                logger.error("Could not write %s: %s", path, e)
                return False
            finally:
                # Clean up temp file on failure
                if temp_file and os.path.exists(temp_file):
                    try:
                        os.remove(temp_file)
                    except OSError:
                        pass


# =============================================================================
# ADAPTER
# =============================================================================

class PersistenceAdapter:
    """
    Maps the session collections to and from their stored blobs.
    
    | key           | shape                         | cap       |
    |---------------|-------------------------------|-----------|
    | notebook      | JSON array of Entry           | unbounded |
    | history       | JSON array of Entry           | 20        |
    | story_history | JSON array of Story           | 10        |
    
    A missing or unreadable blob loads as an empty collection.
    """
    
    def __init__(self, store: KeyValueStore):
        self.store = store
    
    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------
    
    @staticmethod
    def encode(records: List[Any]) -> str:
        return json.dumps([r.to_dict() for r in records], ensure_ascii=False)
    
    @staticmethod
    def decode(raw: str, build: Callable[[Dict[str, Any]], T]) -> List[T]:
        """
        Strictly decode a stored JSON array.
        
        Args:
            raw: Stored blob
            build: Converts one JSON object into a record
            
        Returns:
            Decoded records in stored order
            
        Raises:
            PersistenceError: If the blob is not an array of valid records
        """
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise PersistenceError(f"Invalid JSON: {e}") from e
        
        if not isinstance(data, list):
            raise PersistenceError(f"Expected a JSON array, got {type(data).__name__}")
        
        records = []
        for i, item in enumerate(data):
            try:
                records.append(build(item))
            except (ValueError, TypeError, AttributeError, KeyError) as e:
                raise PersistenceError(f"Invalid record at index {i}: {e}") from e
        return records
    
    def _load(self, key: str, build: Callable[[Dict[str, Any]], T]) -> List[T]:
        raw = self.store.load(key)
        if raw is None:
            return []
        try:
            return self.decode(raw, build)
        except PersistenceError as e:
            logger.warning("Discarding stored %r: %s", key, e)
            return []
    
    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------
    
    def load_notebook(self) -> NotebookSet:
        return NotebookSet(self._load(Config.NOTEBOOK_KEY, entry_from_dict))
    
    def load_history(self) -> HistoryCache:
        return HistoryCache(self._load(Config.HISTORY_KEY, entry_from_dict))
    
    def load_story_log(self) -> StoryLog:
        return StoryLog(self._load(Config.STORY_HISTORY_KEY, Story.from_dict))
    
    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------
    
    def save_notebook(self, notebook: NotebookSet) -> bool:
        return self.store.save(Config.NOTEBOOK_KEY, self.encode(notebook.entries))
    
    def save_history(self, history: HistoryCache) -> bool:
        return self.store.save(Config.HISTORY_KEY, self.encode(history.entries))
    
    def save_story_log(self, story_log: StoryLog) -> bool:
        return self.store.save(Config.STORY_HISTORY_KEY, self.encode(story_log.stories))
