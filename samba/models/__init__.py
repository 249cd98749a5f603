"""Data models for Samba."""

from .entry import (
    PERSONS,
    BreakdownItem,
    Conjugation,
    Entry,
    Etymology,
    Example,
    SentenceAnalysis,
    SentenceEntry,
    Synonym,
    TranslatedTerm,
    WordEntry,
    entry_from_dict,
    new_id,
)
from .story import ChatMessage, Story
from .verb import VERB_TYPES, StaticVerb

__all__ = [
    'PERSONS',
    'BreakdownItem',
    'Conjugation',
    'Entry',
    'Etymology',
    'Example',
    'SentenceAnalysis',
    'SentenceEntry',
    'Synonym',
    'TranslatedTerm',
    'WordEntry',
    'entry_from_dict',
    'new_id',
    'ChatMessage',
    'Story',
    'VERB_TYPES',
    'StaticVerb',
]
