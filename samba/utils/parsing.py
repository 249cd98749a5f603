"""Text parsing utilities for consistent text processing across the application."""

import html
import json
import re
import unicodedata
from typing import Any


class TextParser:
    """
    Centralized text parsing utilities.
    
    Single source of truth for normalizing user queries, backend replies
    and text sent to speech synthesis.
    """
    
    # HTML tag removal pattern
    HTML_TAG_PATTERN = re.compile(r'<[^>]+>')
    
    # Markdown code fence around a JSON reply
    CODE_FENCE_PATTERN = re.compile(r'^```(?:json)?\s*(.*?)\s*```$', re.DOTALL)
    
    # Markdown emphasis markers
    MARKDOWN_PATTERN = re.compile(r'[*_`#]+')
    
    # Whitespace normalization pattern
    WHITESPACE_PATTERN = re.compile(r'\s+')
    
    @classmethod
    def normalize_unicode(cls, text: str) -> str:
        """
        Normalize text to NFC form for consistent Unicode handling.
        
        Prevents issues with characters like ã being represented as
        either a single codepoint (NFC) or base + combining tilde (NFD).
        
        Args:
            text: Input text
            
        Returns:
            NFC-normalized text
        """
        if not text:
            return ""
        return unicodedata.normalize('NFC', str(text))
    
    @classmethod
    def normalize_query(cls, text: str) -> str:
        """Trim and collapse whitespace in a raw user query."""
        if not text:
            return ""
        text = cls.normalize_unicode(text)
        return cls.WHITESPACE_PATTERN.sub(' ', text).strip()
    
    @classmethod
    def fold_term(cls, term: str) -> str:
        """Case-folded key used for case-insensitive term comparison."""
        return cls.normalize_unicode(term).casefold()
    
    @classmethod
    def parse_json_reply(cls, text: str) -> Any:
        """
        Decode a JSON document returned by a language model.
        
        Models occasionally wrap JSON in a markdown code fence even when
        asked for raw JSON; the fence is stripped before decoding.
        
        Args:
            text: Raw model reply
            
        Returns:
            Decoded JSON value
            
        Raises:
            ValueError: If the reply is empty or not valid JSON
        """
        if not text or not text.strip():
            raise ValueError("Empty response from AI")
        
        text = text.strip()
        match = cls.CODE_FENCE_PATTERN.match(text)
        if match:
            text = match.group(1)
        
        return json.loads(text)
    
    @classmethod
    def clean_for_tts(cls, text: str) -> str:
        """
        Clean text for TTS processing.
        
        Removes HTML, markdown markers, normalizes whitespace.
        
        Args:
            text: Raw text
            
        Returns:
            Cleaned text ready for TTS
        """
        if not text:
            return ""
        
        # Unescape HTML entities
        text = html.unescape(str(text))
        
        # Remove HTML tags
        text = cls.HTML_TAG_PATTERN.sub('', text)
        
        text = cls.MARKDOWN_PATTERN.sub('', text)
        
        # Normalize whitespace
        text = cls.WHITESPACE_PATTERN.sub(' ', text).strip()
        
        # Unicode normalization
        text = cls.normalize_unicode(text)
        
        return text
