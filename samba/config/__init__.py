"""Configuration module for Samba."""

from .settings import Config
from .languages import VOICE_CONFIG

__all__ = [
    'Config',
    'VOICE_CONFIG',
]
