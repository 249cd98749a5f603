"""Samba - Portuguese vocabulary notebook for Chinese speakers"""

__version__ = "1.0.0"
__author__ = "Samba Team"

from .config import Config
from .models import Entry, SentenceEntry, StaticVerb, Story, WordEntry
from .session import JsonFileStore, SessionController, SessionState
from .services import AIService, SpeechService, create_ai_service

__all__ = [
    'Config',
    'Entry',
    'SentenceEntry',
    'StaticVerb',
    'Story',
    'WordEntry',
    'JsonFileStore',
    'SessionController',
    'SessionState',
    'AIService',
    'SpeechService',
    'create_ai_service',
]
