"""
AI Service - LLM backend for lookups, stories and tutor chat.

Provides abstraction over LLM providers (Gemini, OpenAI-compatible APIs)
for the three generative operations the session consumes:
- Resolving a raw query into a learning Entry
- Composing a short story from saved vocabulary
- Answering questions about the entry being studied
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import aiohttp

from ..config import Config
from ..models import ChatMessage, Entry, SentenceEntry, Story, WordEntry, entry_from_dict
from ..utils.parsing import TextParser
from .errors import ChatError, CompositionError, ProviderError, ResolutionError

logger = logging.getLogger(__name__)


class AIProvider(Enum):
    """Supported AI providers."""
    GEMINI = "gemini"
    OPENAI = "openai"


@dataclass
class AIConfig:
    """Configuration for AI service."""
    provider: AIProvider = AIProvider.GEMINI
    model: str = "gemini-2.5-flash"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 4096
    timeout: int = 30


# Structured output for lookups (Gemini responseSchema dialect)
_PAIR = {"type": "OBJECT", "properties": {"word": {"type": "STRING"}, "cn": {"type": "STRING"}}}

ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "term": {"type": "STRING"},
        "is_sentence": {"type": "BOOLEAN"},
        "definition": {"type": "STRING", "nullable": True},
        "definition_en": {"type": "STRING", "nullable": True},
        "ipa": {"type": "STRING", "nullable": True},
        "examples": {
            "type": "ARRAY",
            "nullable": True,
            "items": {"type": "OBJECT", "properties": {"pt": {"type": "STRING"}, "cn": {"type": "STRING"}}},
        },
        "synonyms": {
            "type": "ARRAY",
            "nullable": True,
            "items": {"type": "OBJECT", "properties": {"word": {"type": "STRING"}, "distinction": {"type": "STRING"}}},
        },
        "conjugations": {
            "type": "ARRAY",
            "nullable": True,
            "items": {
                "type": "OBJECT",
                "properties": {
                    "tense": {"type": "STRING"},
                    "forms": {
                        "type": "OBJECT",
                        "properties": {p: {"type": "STRING"} for p in ("eu", "tu", "ele", "nos", "vos", "eles")},
                    },
                },
            },
        },
        "etymology": {
            "type": "OBJECT",
            "nullable": True,
            "properties": {
                "root": {"type": "STRING"},
                "root_cn": {"type": "STRING"},
                "pt_derivatives": {"type": "ARRAY", "items": _PAIR},
                "en_derivatives": {"type": "ARRAY", "items": _PAIR},
            },
        },
        "sentence_analysis": {
            "type": "OBJECT",
            "nullable": True,
            "properties": {
                "translation": {"type": "STRING"},
                "breakdown": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "word": {"type": "STRING"},
                            "meaning": {"type": "STRING"},
                            "role": {"type": "STRING"},
                        },
                    },
                },
                "grammar_notes": {"type": "STRING"},
                "cultural_context": {"type": "STRING"},
            },
        },
        "casual_explanation": {"type": "STRING"},
    },
    "required": ["term", "is_sentence", "casual_explanation"],
}

STORY_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "pt_story": {"type": "STRING"},
        "cn_translation": {"type": "STRING"},
    },
    "required": ["pt_story", "cn_translation"],
}


class BaseAIProvider(ABC):
    """Abstract base class for AI providers."""

    def __init__(self, config: AIConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Generate a completion for a single prompt.

        When ``response_schema`` is given the provider is asked for a JSON
        reply following it.
        """
        pass

    @abstractmethod
    async def chat(self, turns: List[ChatMessage], message: str, system_prompt: str) -> str:
        """Continue a conversation with one more user message."""
        pass


class GeminiProvider(BaseAIProvider):
    """Google Gemini REST API provider."""

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    async def _generate(
        self,
        contents: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        session = await self._get_session()

        base_url = self.config.base_url or self.DEFAULT_BASE_URL
        url = f"{base_url}/models/{self.config.model}:generateContent"

        headers = {
            "x-goog-api-key": self.config.api_key or "",
            "Content-Type": "application/json",
        }

        generation_config: Dict[str, Any] = {
            "temperature": self.config.temperature,
            "maxOutputTokens": self.config.max_tokens,
        }
        if response_schema:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema

        payload: Dict[str, Any] = {
            "contents": contents,
            "generationConfig": generation_config,
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        try:
            async with session.post(url, headers=headers, json=payload) as response:
                if response.status != 200:
                    error = await response.text()
                    raise ProviderError(f"Gemini API error {response.status}: {error[:200]}")
                data = await response.json()
        except asyncio.TimeoutError as e:
            raise ProviderError("Gemini API timeout") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Gemini API returned no candidates") from e
        try:
            return "".join(part.get("text", "") for part in parts)
        except (AttributeError, TypeError) as e:
            raise ProviderError("Gemini API returned malformed parts") from e

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate completion using Gemini API."""
        contents = [{"role": "user", "parts": [{"text": prompt}]}]
        return await self._generate(contents, system_prompt, response_schema)

    async def chat(self, turns: List[ChatMessage], message: str, system_prompt: str) -> str:
        """Continue a conversation using Gemini API."""
        contents = [turn.to_api() for turn in turns]
        contents.append({"role": "user", "parts": [{"text": message}]})
        return await self._generate(contents, system_prompt)


class OpenAIProvider(BaseAIProvider):
    """OpenAI API provider (also works with compatible APIs)."""

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    async def _chat_completion(self, messages: List[Dict[str, str]], json_mode: bool = False) -> str:
        session = await self._get_session()

        base_url = self.config.base_url or self.DEFAULT_BASE_URL
        url = f"{base_url}/chat/completions"

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        payload: Dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with session.post(url, headers=headers, json=payload) as response:
                if response.status != 200:
                    error = await response.text()
                    raise ProviderError(f"OpenAI API error {response.status}: {error[:200]}")
                data = await response.json()
        except asyncio.TimeoutError as e:
            raise ProviderError("OpenAI API timeout") from e

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("OpenAI API returned no choices") from e

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate completion using OpenAI API."""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return await self._chat_completion(messages, json_mode=response_schema is not None)

    async def chat(self, turns: List[ChatMessage], message: str, system_prompt: str) -> str:
        """Continue a conversation using OpenAI API."""
        messages = [{"role": "system", "content": system_prompt}]
        for turn in turns:
            role = "assistant" if turn.role == "model" else "user"
            messages.append({"role": role, "content": turn.text})
        messages.append({"role": "user", "content": message})
        return await self._chat_completion(messages)


class AIService:
    """
    High-level AI service for the learning session.

    Implements the resolver, composer and tutor operations on top of a
    provider. Every failure is reported through the application's error
    taxonomy so callers never see transport exceptions.

    Usage:
        async with create_ai_service() as ai:
            entry = await ai.resolve_entry("房子")
    """

    LOOKUP_PROMPT = """User Input: "{query}"
Target Audience: Simplified Chinese native speaker learning Portuguese.

Task: Analyze the input and create a learning entry as JSON.

1. Language detection:
   - If the input is Chinese, translate it to the most common, natural
     Brazilian Portuguese equivalent and use that as "term".
   - If the input is already Portuguese, use it directly as "term".

2. Type detection: is "term" a single word / short phrase or a full
   sentence? Set "is_sentence" accordingly.

3. For a word or phrase:
   - definition: Chinese explanation; definition_en: English explanation
   - ipa: IPA pronunciation
   - examples: 2 sentences, each {{pt, cn}}
   - synonyms: 3 related words, each {{word, distinction}} (distinction in Chinese)
   - etymology: Latin root, root_cn, pt_derivatives and en_derivatives as {{word, cn}}
   - conjugations: for verbs, the Present, Past Perfect, Imperfect,
     Imperative, Present Subjunctive and Future tenses with forms for
     eu, tu, ele, nos, vos, eles; otherwise an empty list
   - casual_explanation: a fun tip or cultural note
   - sentence_analysis: null

4. For a sentence:
   - term: the full Portuguese sentence
   - definition, ipa: null
   - sentence_analysis: translation (natural Chinese), breakdown (every
     word as {{word, meaning, role}}), grammar_notes, cultural_context
   - casual_explanation: a brief summary of the vibe
"""

    STORY_PROMPT = """Create a short, funny story (max 100 words) in Brazilian Portuguese using the following list of words: {words}.
Then provide a Simplified Chinese translation.
Return JSON with "pt_story" and "cn_translation"."""

    TUTOR_PROMPT = """You are a helpful Portuguese tutor. The user is currently looking at:
{context}

Answer the user's questions specifically about this. Keep answers concise, friendly, and encourage learning."""

    def __init__(self, config: Optional[AIConfig] = None):
        """
        Initialize AI service.

        Args:
            config: AI configuration. If None, uses Config / environment.
        """
        self.config = config or self._config_from_env()
        self._provider: Optional[BaseAIProvider] = None

    def _config_from_env(self) -> AIConfig:
        """Create config from application settings."""
        provider = {
            "gemini": AIProvider.GEMINI,
            "openai": AIProvider.OPENAI,
        }.get(Config.AI_PROVIDER, AIProvider.GEMINI)

        return AIConfig(
            provider=provider,
            model=Config.AI_MODEL,
            api_key=Config.AI_API_KEY or None,
            base_url=Config.AI_BASE_URL or None,
            temperature=Config.AI_TEMPERATURE,
            timeout=Config.TIMEOUT,
        )

    def _get_provider(self) -> BaseAIProvider:
        """Get or create the appropriate provider."""
        if self._provider is None:
            provider_classes = {
                AIProvider.GEMINI: GeminiProvider,
                AIProvider.OPENAI: OpenAIProvider,
            }
            provider_class = provider_classes.get(self.config.provider, GeminiProvider)
            self._provider = provider_class(self.config)
        return self._provider

    async def close(self) -> None:
        """Close the AI service and release resources."""
        if self._provider:
            await self._provider.close()
            self._provider = None

    async def __aenter__(self) -> "AIService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def resolve_entry(self, query: str) -> Entry:
        """
        Turn a raw user query into a learning entry.

        Args:
            query: Portuguese word/phrase/sentence or a Chinese query

        Returns:
            WordEntry or SentenceEntry with a fresh id and timestamp

        Raises:
            ResolutionError: On empty input, transport failure or an
                unusable reply
        """
        raw_query = query
        query = TextParser.normalize_query(query)
        if not query:
            raise ResolutionError("Empty query")

        provider = self._get_provider()
        prompt = self.LOOKUP_PROMPT.format(query=query)

        try:
            reply = await provider.complete(prompt, response_schema=ENTRY_SCHEMA)
            data = TextParser.parse_json_reply(reply)
            entry = entry_from_dict(data, original_query=raw_query)
        except (ProviderError, aiohttp.ClientError) as e:
            logger.error("Lookup of %r failed: %s", query, e)
            raise ResolutionError(f"Lookup failed: {e}") from e
        except (ValueError, TypeError, AttributeError) as e:
            logger.error("Lookup of %r returned an unusable reply: %s", query, e)
            raise ResolutionError(f"Malformed AI response: {e}") from e

        logger.info("Resolved %r -> %r", query, entry.term)
        return entry

    async def compose_story(self, terms: List[str]) -> Story:
        """
        Compose a short story using the given terms.

        The minimum word count is the caller's responsibility.

        Raises:
            CompositionError: On transport failure or an unusable reply
        """
        provider = self._get_provider()
        prompt = self.STORY_PROMPT.format(words=", ".join(terms))

        try:
            reply = await provider.complete(prompt, response_schema=STORY_SCHEMA)
            data = TextParser.parse_json_reply(reply)
            story = Story.from_dict(data, words_used=list(terms))
        except (ProviderError, aiohttp.ClientError) as e:
            logger.error("Story generation failed: %s", e)
            raise CompositionError(f"Story generation failed: {e}") from e
        except (ValueError, TypeError, AttributeError) as e:
            logger.error("Story generation returned an unusable reply: %s", e)
            raise CompositionError(f"Malformed AI response: {e}") from e

        return story

    @staticmethod
    def describe_entry(entry: Entry) -> str:
        """Context block given to the tutor for the entry being studied."""
        if isinstance(entry, SentenceEntry):
            analysis = entry.sentence_analysis
            return (
                f'Sentence: "{entry.term}"\n'
                f"Translation: {analysis.translation}\n"
                f"Grammar: {analysis.grammar_notes}"
            )
        if isinstance(entry, WordEntry):
            return f'Word: "{entry.term}"\nDefinition: {entry.definition}'
        raise TypeError(f"Unsupported entry type: {type(entry).__name__}")

    async def answer_chat(self, prior_turns: List[ChatMessage], message: str, entry: Entry) -> str:
        """
        Answer a question about ``entry``.

        Args:
            prior_turns: Conversation so far, oldest first
            message: New user message
            entry: Entry the conversation is about

        Raises:
            ChatError: On transport failure
        """
        provider = self._get_provider()
        system_prompt = self.TUTOR_PROMPT.format(context=self.describe_entry(entry))

        try:
            reply = await provider.chat(prior_turns, message, system_prompt)
        except (ProviderError, aiohttp.ClientError) as e:
            logger.error("Tutor chat failed: %s", e)
            raise ChatError(str(e)) from e

        return reply.strip()


# Convenience factory function
def create_ai_service(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    api_key: Optional[str] = None
) -> AIService:
    """
    Create an AI service with specified configuration.

    Args:
        provider: Provider name (gemini, openai); Config.AI_PROVIDER if None
        model: Model name (uses Config.AI_MODEL if None)
        api_key: API key (uses environment if None)

    Returns:
        Configured AIService instance
    """
    provider_enum = {
        "gemini": AIProvider.GEMINI,
        "openai": AIProvider.OPENAI,
    }.get((provider or Config.AI_PROVIDER).lower(), AIProvider.GEMINI)

    config = AIConfig(
        provider=provider_enum,
        model=model or Config.AI_MODEL,
        api_key=api_key or Config.AI_API_KEY or None,
        base_url=Config.AI_BASE_URL or None,
        temperature=Config.AI_TEMPERATURE,
        timeout=Config.TIMEOUT,
    )

    return AIService(config)
