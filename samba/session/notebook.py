"""Personal notebook of saved entries."""

import logging
from typing import Iterator, List, Optional

from ..models import Entry

logger = logging.getLogger(__name__)


class NotebookSet:
    """
    Saved entries, most recently saved first.
    
    Behaves as a set keyed by exact-case ``term``. Independent of the
    history: removing from one never affects the other.
    """
    
    def __init__(self, entries: Optional[List[Entry]] = None):
        self._entries: List[Entry] = []
        seen = set()
        for entry in entries or []:
            if entry.term in seen:
                continue
            seen.add(entry.term)
            self._entries.append(entry)
    
    def contains(self, term: str) -> bool:
        return any(e.term == term for e in self._entries)
    
    def toggle(self, entry: Entry) -> bool:
        """
        Unsave ``entry`` if its term is saved, otherwise save it at the front.
        
        Returns:
            True if the entry is saved after the call
        """
        if self.contains(entry.term):
            self._entries = [e for e in self._entries if e.term != entry.term]
            logger.debug("Notebook: removed %r", entry.term)
            return False
        self._entries.insert(0, entry)
        logger.debug("Notebook: saved %r", entry.term)
        return True
    
    def terms(self, limit: Optional[int] = None) -> List[str]:
        """Terms in notebook order, optionally only the first ``limit``."""
        entries = self._entries if limit is None else self._entries[:limit]
        return [e.term for e in entries]
    
    @property
    def entries(self) -> List[Entry]:
        return list(self._entries)
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))
