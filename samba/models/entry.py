"""Data models for resolved lookups."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union

PERSONS = ("eu", "tu", "ele", "nos", "vos", "eles")

_last_id = 0


def new_id() -> str:
    """Return a unique, creation-ordered identifier (epoch milliseconds)."""
    global _last_id
    candidate = int(time.time() * 1000)
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return str(candidate)


def now_ms() -> int:
    return int(time.time() * 1000)


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _items(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list")
    return value


@dataclass
class Example:
    pt: str
    cn: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Example":
        return cls(pt=_text(data, "pt"), cn=_text(data, "cn"))

    def to_dict(self) -> Dict[str, Any]:
        return {"pt": self.pt, "cn": self.cn}


@dataclass
class Synonym:
    word: str
    distinction: str  # brief comparison in Chinese

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Synonym":
        return cls(word=_text(data, "word"), distinction=_text(data, "distinction"))

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "distinction": self.distinction}


@dataclass
class TranslatedTerm:
    word: str
    cn: str = ""

    @classmethod
    def from_value(cls, value: Union[str, Dict[str, Any]]) -> "TranslatedTerm":
        """Accept either a bare derivative string or a {word, cn} pair."""
        if isinstance(value, str):
            return cls(word=value)
        return cls(word=_text(value, "word"), cn=_text(value, "cn"))

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "cn": self.cn}


@dataclass
class Etymology:
    root: str = ""
    root_cn: str = ""
    pt_derivatives: List[TranslatedTerm] = field(default_factory=list)
    en_derivatives: List[TranslatedTerm] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Etymology":
        if not data:
            return cls()
        return cls(
            root=_text(data, "root"),
            root_cn=_text(data, "root_cn"),
            pt_derivatives=[TranslatedTerm.from_value(v) for v in _items(data, "pt_derivatives")],
            en_derivatives=[TranslatedTerm.from_value(v) for v in _items(data, "en_derivatives")],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "root_cn": self.root_cn,
            "pt_derivatives": [d.to_dict() for d in self.pt_derivatives],
            "en_derivatives": [d.to_dict() for d in self.en_derivatives],
        }


@dataclass
class Conjugation:
    """One tense of a verb, keyed by the six grammatical persons."""
    tense: str
    forms: Dict[str, str]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Conjugation":
        forms = data.get("forms") or {}
        return cls(
            tense=_text(data, "tense"),
            forms={person: _text(forms, person) for person in PERSONS},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"tense": self.tense, "forms": dict(self.forms)}


@dataclass
class BreakdownItem:
    word: str
    meaning: str
    role: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BreakdownItem":
        return cls(
            word=_text(data, "word"),
            meaning=_text(data, "meaning"),
            role=_text(data, "role"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "meaning": self.meaning, "role": self.role}


@dataclass
class SentenceAnalysis:
    translation: str = ""
    breakdown: List[BreakdownItem] = field(default_factory=list)
    grammar_notes: str = ""
    cultural_context: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentenceAnalysis":
        return cls(
            translation=_text(data, "translation"),
            breakdown=[BreakdownItem.from_dict(b) for b in _items(data, "breakdown")],
            grammar_notes=_text(data, "grammar_notes"),
            cultural_context=_text(data, "cultural_context"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "translation": self.translation,
            "breakdown": [b.to_dict() for b in self.breakdown],
            "grammar_notes": self.grammar_notes,
            "cultural_context": self.cultural_context,
        }


@dataclass
class Entry(ABC):
    """
    A resolved lookup result.
    
    Concrete entries are either a WordEntry or a SentenceEntry; the
    ``is_sentence`` tag is fixed by the subclass. Identity for every
    collection operation is ``term``, never ``id``.
    """
    
    is_sentence: ClassVar[bool] = False
    
    id: str
    term: str
    timestamp: int
    casual_explanation: str = ""
    original_query: Optional[str] = None
    
    @property
    def search_text(self) -> str:
        """Text the search box shows when this entry is reopened."""
        return self.original_query or self.term
    
    def _common_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "term": self.term,
            "is_sentence": self.is_sentence,
        }
        if self.original_query is not None:
            data["original_query"] = self.original_query
        data["casual_explanation"] = self.casual_explanation
        data["timestamp"] = self.timestamp
        return data
    
    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        pass


@dataclass
class WordEntry(Entry):
    """Lookup of a single word or short phrase."""
    
    is_sentence: ClassVar[bool] = False
    
    definition: str = ""
    definition_en: str = ""
    ipa: str = ""
    examples: List[Example] = field(default_factory=list)
    synonyms: List[Synonym] = field(default_factory=list)
    etymology: Etymology = field(default_factory=Etymology)
    conjugations: List[Conjugation] = field(default_factory=list)
    
    @property
    def is_verb(self) -> bool:
        return bool(self.conjugations)
    
    def to_dict(self) -> Dict[str, Any]:
        data = self._common_dict()
        data.update({
            "definition": self.definition,
            "definition_en": self.definition_en,
            "ipa": self.ipa,
            "examples": [e.to_dict() for e in self.examples],
            "synonyms": [s.to_dict() for s in self.synonyms],
            "etymology": self.etymology.to_dict(),
            "conjugations": [c.to_dict() for c in self.conjugations],
        })
        return data


@dataclass
class SentenceEntry(Entry):
    """Lookup of a full sentence, analysed word by word."""
    
    is_sentence: ClassVar[bool] = True
    
    sentence_analysis: SentenceAnalysis = field(default_factory=SentenceAnalysis)
    
    def to_dict(self) -> Dict[str, Any]:
        data = self._common_dict()
        data["sentence_analysis"] = self.sentence_analysis.to_dict()
        return data


def entry_from_dict(data: Dict[str, Any], original_query: Optional[str] = None) -> Entry:
    """
    Build the right Entry variant from a JSON object.
    
    Used both for backend replies (which carry no id or timestamp) and for
    stored entries. A fresh ``id``/``timestamp`` is assigned when missing.
    ``original_query`` is kept verbatim unless it is blank or equal to
    ``term``.
    
    Args:
        data: Decoded JSON object
        original_query: Raw user input, if this entry comes from a lookup
        
    Returns:
        WordEntry or SentenceEntry, according to ``is_sentence``
        
    Raises:
        ValueError: If the object cannot form a valid entry
    """
    if not isinstance(data, dict):
        raise ValueError("Entry must be a JSON object")
    
    term = data.get("term")
    if not isinstance(term, str) or not term.strip():
        raise ValueError("Entry has no term")
    term = term.strip()
    
    if original_query is None:
        original_query = data.get("original_query")
    if original_query is not None:
        original_query = str(original_query)
        if not original_query.strip() or original_query == term:
            original_query = None
    
    entry_id = data.get("id")
    entry_id = str(entry_id) if entry_id not in (None, "") else new_id()
    timestamp = data.get("timestamp")
    timestamp = int(timestamp) if timestamp is not None else now_ms()
    
    common = {
        "id": entry_id,
        "term": term,
        "timestamp": timestamp,
        "casual_explanation": _text(data, "casual_explanation"),
        "original_query": original_query,
    }
    
    if data.get("is_sentence"):
        analysis = data.get("sentence_analysis")
        if not isinstance(analysis, dict):
            raise ValueError(f"Sentence entry '{term}' has no sentence_analysis")
        return SentenceEntry(
            sentence_analysis=SentenceAnalysis.from_dict(analysis),
            **common,
        )
    
    return WordEntry(
        definition=_text(data, "definition"),
        definition_en=_text(data, "definition_en"),
        ipa=_text(data, "ipa"),
        examples=[Example.from_dict(e) for e in _items(data, "examples")],
        synonyms=[Synonym.from_dict(s) for s in _items(data, "synonyms")],
        etymology=Etymology.from_dict(data.get("etymology")),
        conjugations=[Conjugation.from_dict(c) for c in _items(data, "conjugations")],
        **common,
    )
