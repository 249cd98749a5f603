import asyncio
import sys
from pathlib import Path
from typing import Dict, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from samba.models import ChatMessage, Entry, Story, entry_from_dict  # noqa: E402
from samba.services.errors import ChatError, CompositionError, ResolutionError, SynthesisError  # noqa: E402
from samba.session import MemoryStore, SessionController  # noqa: E402


def make_word(term: str, definition: str = "", **extra) -> Entry:
    data = {"term": term, "is_sentence": False, "definition": definition or f"def of {term}"}
    data.update(extra)
    return entry_from_dict(data)


def make_sentence(term: str, translation: str = "", **extra) -> Entry:
    data = {
        "term": term,
        "is_sentence": True,
        "sentence_analysis": {
            "translation": translation or f"translation of {term}",
            "breakdown": [],
            "grammar_notes": "",
            "cultural_context": "",
        },
    }
    data.update(extra)
    return entry_from_dict(data)


class FakeBackend:
    """Stands in for AIService in controller tests."""

    def __init__(self):
        self.entries: Dict[str, Entry] = {}
        self.resolve_calls: List[str] = []
        self.compose_calls: List[List[str]] = []
        self.chat_calls: List[tuple] = []
        self.fail_resolve = False
        self.fail_compose = False
        self.fail_chat = False
        self.chat_reply = "Boa pergunta!"

    async def resolve_entry(self, query: str) -> Entry:
        self.resolve_calls.append(query)
        if self.fail_resolve:
            raise ResolutionError("backend down")
        if query in self.entries:
            return self.entries[query]
        return entry_from_dict({"term": query, "is_sentence": False, "definition": "x"}, original_query=query)

    async def compose_story(self, terms: List[str]) -> Story:
        self.compose_calls.append(list(terms))
        if self.fail_compose:
            raise CompositionError("backend down")
        return Story.from_dict({"pt_story": "Era uma vez...", "cn_translation": "从前..."}, words_used=terms)

    async def answer_chat(self, prior_turns: List[ChatMessage], message: str, entry: Entry) -> str:
        self.chat_calls.append((list(prior_turns), message, entry.term))
        if self.fail_chat:
            raise ChatError("backend down")
        return self.chat_reply


class FakeSpeech:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[str] = []

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        if self.fail:
            raise SynthesisError("no audio")
        return b"ID3audio"


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def controller(backend: FakeBackend, store: MemoryStore) -> SessionController:
    ctrl = SessionController(backend, store, speech=FakeSpeech())
    ctrl.start()
    return ctrl
