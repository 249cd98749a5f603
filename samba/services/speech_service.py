"""Speech synthesis via Edge TTS."""

import logging
from typing import Optional

import edge_tts

from ..config import Config
from ..utils.parsing import TextParser
from .errors import SynthesisError

logger = logging.getLogger(__name__)


class SpeechService:
    """Produce spoken Portuguese audio (MP3 bytes) for a piece of text."""
    
    def __init__(self, voice: Optional[str] = None, rate: str = "+0%", volume: str = "+0%"):
        """
        Initialize speech service.
        
        Args:
            voice: Edge TTS voice name (defaults to Config.VOICE)
            rate: Speaking rate adjustment (e.g., "-10%")
            volume: Volume adjustment (e.g., "+0%", "+40%")
        """
        self.voice = voice or Config.VOICE
        self.rate = rate
        self.volume = volume
    
    async def synthesize(self, text: str) -> bytes:
        """
        Generate audio for ``text``.
        
        Blank text yields empty audio without calling the backend.
        
        Returns:
            MP3 audio bytes
            
        Raises:
            SynthesisError: If the backend fails or returns no audio
        """
        clean_text = TextParser.clean_for_tts(text)
        if not clean_text:
            return b""
        
        chunks = []
        try:
            communicate = edge_tts.Communicate(clean_text, self.voice, rate=self.rate, volume=self.volume)
            async for chunk in communicate.stream():
                if chunk.get("type") == "audio":
                    chunks.append(chunk["data"])
        except Exception as e:
            # edge_tts raises assorted network and protocol error types
            raise SynthesisError(f"Speech synthesis failed: {e}") from e
        
        if not chunks:
            raise SynthesisError("No audio data received")
        
        audio = b"".join(chunks)
        logger.debug("Synthesized %d bytes for %r", len(audio), clean_text[:40])
        return audio
    
    async def save(self, text: str, output_path: str) -> None:
        """Synthesize ``text`` and write the audio to ``output_path``."""
        audio = await self.synthesize(text)
        with open(output_path, 'wb') as f:
            f.write(audio)
