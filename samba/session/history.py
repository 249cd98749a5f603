"""Most-recently-used log of past lookups."""

import logging
from typing import Iterator, List, Optional

from ..config import Config
from ..models import Entry
from ..utils.parsing import TextParser

logger = logging.getLogger(__name__)


class HistoryCache:
    """
    Bounded, deduplicating MRU log of resolved entries.
    
    Front is most recent. No two entries share a term under
    case-insensitive comparison: recording a known term drops the old
    occurrence and puts the new payload at the front.
    
    This is a log, not a resolution memo; every ``record`` follows a fresh
    lookup.
    """
    
    def __init__(self, entries: Optional[List[Entry]] = None, limit: int = Config.HISTORY_LIMIT):
        self.limit = limit
        self._entries: List[Entry] = self._dedupe(entries or [])[:limit]
    
    @staticmethod
    def _dedupe(entries: List[Entry]) -> List[Entry]:
        seen = set()
        result = []
        for entry in entries:
            key = TextParser.fold_term(entry.term)
            if key in seen:
                continue
            seen.add(key)
            result.append(entry)
        return result
    
    def record(self, entry: Entry) -> None:
        """Move ``entry`` to the front, replacing any same-term entry."""
        key = TextParser.fold_term(entry.term)
        self._entries = [e for e in self._entries if TextParser.fold_term(e.term) != key]
        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        logger.debug("History: recorded %r (%d entries)", entry.term, len(self._entries))
    
    def clear(self) -> None:
        self._entries = []
    
    def most_recent_matching(self, term: str) -> Optional[Entry]:
        """Return the entry whose term matches case-insensitively, if any."""
        key = TextParser.fold_term(term)
        for entry in self._entries:
            if TextParser.fold_term(entry.term) == key:
                return entry
        return None
    
    @property
    def entries(self) -> List[Entry]:
        return list(self._entries)
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))
