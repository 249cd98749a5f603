"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .languages import VOICE_CONFIG

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)

# Currently selected Portuguese variant
CURRENT_VARIANT = os.environ.get("SAMBA_VARIANT", "PT-BR")


@dataclass
class Config:
    """Application-wide configuration."""
    
    settings = VOICE_CONFIG.get(CURRENT_VARIANT, VOICE_CONFIG["PT-BR"])
    
    VARIANT: str = CURRENT_VARIANT
    VOICE: str = os.environ.get("SAMBA_VOICE", settings["voice"])
    LABEL: str = settings["label"]
    
    # AI backend
    # Store the key in an environment variable or .env file: GEMINI_API_KEY
    AI_PROVIDER: str = os.environ.get("AI_PROVIDER", "gemini").lower()
    AI_MODEL: str = os.environ.get("AI_MODEL", "gemini-2.5-flash")
    AI_BASE_URL: str = os.environ.get("AI_BASE_URL", "")
    AI_API_KEY: str = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", "")
    AI_TEMPERATURE: float = float(os.environ.get("AI_TEMPERATURE", "0.7"))
    TIMEOUT: int = int(os.environ.get("TIMEOUT", "30"))
    
    # Collection limits
    HISTORY_LIMIT: int = 20
    STORY_LIMIT: int = 10
    STORY_MIN_WORDS: int = 3
    STORY_MAX_WORDS: int = 10
    
    # Storage keys
    NOTEBOOK_KEY: str = "notebook"
    HISTORY_KEY: str = "history"
    STORY_HISTORY_KEY: str = "story_history"
    
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
    
    # BASE_DIR is the project root (parent of samba/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()
    DATA_DIR: str = os.environ.get("SAMBA_DATA_DIR", str(BASE_DIR / "data"))
