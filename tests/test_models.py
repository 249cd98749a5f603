import pytest

from samba.models import (
    PERSONS,
    Entry,
    SentenceEntry,
    StaticVerb,
    Story,
    WordEntry,
    entry_from_dict,
    new_id,
)


WORD_REPLY = {
    "term": "casa",
    "is_sentence": False,
    "definition": "房子；家",
    "definition_en": "house; home",
    "ipa": "/ˈka.zɐ/",
    "examples": [{"pt": "A casa é grande.", "cn": "房子很大。"}],
    "synonyms": [{"word": "lar", "distinction": "更强调家的感觉"}],
    "etymology": {
        "root": "casa",
        "root_cn": "小屋",
        "pt_derivatives": [{"word": "casamento", "cn": "婚姻"}],
        "en_derivatives": ["casino"],
    },
    "conjugations": [],
    "sentence_analysis": None,
    "casual_explanation": "Em casa = at home.",
}


def test_word_reply_builds_word_entry() -> None:
    entry = entry_from_dict(WORD_REPLY, original_query="房子")
    assert isinstance(entry, WordEntry)
    assert entry.is_sentence is False
    assert entry.term == "casa"
    assert entry.original_query == "房子"
    assert entry.examples[0].cn == "房子很大。"
    assert entry.etymology.en_derivatives[0].word == "casino"
    assert entry.etymology.en_derivatives[0].cn == ""
    assert entry.id
    assert entry.timestamp > 0


def test_original_query_dropped_when_same_as_term() -> None:
    entry = entry_from_dict(WORD_REPLY, original_query="casa")
    assert entry.original_query is None
    assert entry.search_text == "casa"
    assert entry_from_dict(WORD_REPLY, original_query="   ").original_query is None


def test_original_query_kept_verbatim_for_whitespace_change() -> None:
    entry = entry_from_dict(WORD_REPLY, original_query="  casa ")
    assert entry.original_query == "  casa "
    assert entry.to_dict()["original_query"] == "  casa "


def test_base_entry_is_abstract() -> None:
    with pytest.raises(TypeError):
        Entry(id="1", term="casa", timestamp=1)


def test_original_query_kept_for_case_change() -> None:
    entry = entry_from_dict(WORD_REPLY, original_query="Casa")
    assert entry.original_query == "Casa"
    assert entry.search_text == "Casa"


def test_sentence_reply_builds_sentence_entry() -> None:
    entry = entry_from_dict({
        "term": "Eu gosto de pão.",
        "is_sentence": True,
        "definition": None,
        "ipa": None,
        "sentence_analysis": {
            "translation": "我喜欢面包。",
            "breakdown": [{"word": "gosto", "meaning": "喜欢", "role": "动词"}],
            "grammar_notes": "gostar de + 名词",
            "cultural_context": "",
        },
        "casual_explanation": "Simples.",
    })
    assert isinstance(entry, SentenceEntry)
    assert entry.is_sentence is True
    assert entry.sentence_analysis.breakdown[0].role == "动词"


def test_sentence_without_analysis_is_rejected() -> None:
    with pytest.raises(ValueError):
        entry_from_dict({"term": "Olá, tudo bem?", "is_sentence": True})


def test_missing_term_is_rejected() -> None:
    with pytest.raises(ValueError):
        entry_from_dict({"is_sentence": False, "definition": "x"})


def test_to_dict_only_carries_own_variant_fields() -> None:
    word = entry_from_dict(WORD_REPLY).to_dict()
    assert "sentence_analysis" not in word
    assert word["is_sentence"] is False
    assert "original_query" not in word

    sentence = entry_from_dict({
        "term": "Bom dia!",
        "is_sentence": True,
        "sentence_analysis": {"translation": "早上好！"},
    }).to_dict()
    assert sentence["is_sentence"] is True
    for key in ("definition", "definition_en", "ipa", "examples", "synonyms", "etymology", "conjugations"):
        assert key not in sentence


def test_conjugation_forms_cover_all_persons() -> None:
    entry = entry_from_dict({
        "term": "falar",
        "is_sentence": False,
        "conjugations": [{"tense": "Presente", "forms": {"eu": "falo", "tu": "falas"}}],
    })
    forms = entry.conjugations[0].forms
    assert tuple(forms) == PERSONS
    assert forms["eu"] == "falo"
    assert forms["eles"] == ""
    assert entry.is_verb is True


def test_stored_id_and_timestamp_are_kept() -> None:
    entry = entry_from_dict({"id": "42", "timestamp": 1700000000000, "term": "mar"})
    assert entry.id == "42"
    assert entry.timestamp == 1700000000000


def test_new_ids_are_creation_ordered() -> None:
    ids = [int(new_id()) for _ in range(50)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 50


def test_story_from_reply_uses_given_words() -> None:
    story = Story.from_dict({"pt_story": "Era uma vez.", "cn_translation": "从前。"}, words_used=["a", "b", "c"])
    assert story.words_used == ["a", "b", "c"]
    assert story.id


def test_story_without_text_is_rejected() -> None:
    with pytest.raises(ValueError):
        Story.from_dict({})


def test_static_verb_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        StaticVerb("pôr", "放", "or")
