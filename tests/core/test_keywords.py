"""
Test suite for keyword extraction and synonym expansion.

System role: Verification of keyword query preparation
"""

import json

import pytest

from knowledge_base.core.exceptions import ConfigurationError
from knowledge_base.core.retrieval.keyword_augmenter import KeywordAugmenter, extract_keywords
from knowledge_base.core.retrieval.synonyms import (
    DEFAULT_SYNONYM_RULES,
    SynonymRule,
    expand_synonyms,
    load_synonym_rules,
)


class TestExtractKeywords:
    """Test suite for extract_keywords()."""

    def test_extract_keywords_should_lowercase_and_split_on_non_alphanumerics(self) -> None:
        assert extract_keywords("What are the Work-Hours?") == ["what", "are", "the", "work", "hours"]

    def test_extract_keywords_should_drop_short_tokens(self) -> None:
        assert extract_keywords("is it ok to go") == []

    def test_extract_keywords_should_deduplicate_in_first_seen_order(self) -> None:
        assert extract_keywords("Work work WORK hours") == ["work", "hours"]

    def test_extract_keywords_should_cap_at_max_keywords(self) -> None:
        result = extract_keywords("alpha beta gamma delta epsilon zeta eta")

        assert result == ["alpha", "beta", "gamma", "delta", "epsilon"]

    def test_extract_keywords_should_keep_digits(self) -> None:
        assert extract_keywords("policy 2024 v2") == ["policy", "2024"]


class TestExpandSynonyms:
    """Test suite for expand_synonyms() with the built-in rules."""

    def test_expand_synonyms_should_fire_on_phrase(self) -> None:
        expansions = expand_synonyms("what are the work hours?", DEFAULT_SYNONYM_RULES)

        assert "working hours" in expansions
        assert "9 to 5" in expansions
        assert len(expansions) == 14

    def test_expand_synonyms_should_fire_when_both_words_present(self) -> None:
        expansions = expand_synonyms("How many hours do we work?", DEFAULT_SYNONYM_RULES)

        assert "business hours" in expansions

    def test_expand_synonyms_should_not_fire_on_partial_trigger(self) -> None:
        assert expand_synonyms("remote work policy", DEFAULT_SYNONYM_RULES) == []

    def test_expand_synonyms_should_deduplicate_across_rules(self) -> None:
        rules = [
            SynonymRule(triggers=[["leave"]], expansions=["annual leave", "holiday"]),
            SynonymRule(triggers=[["holiday"]], expansions=["holiday", "vacation"]),
        ]

        result = expand_synonyms("leave and holiday", rules)

        assert result == ["annual leave", "holiday", "vacation"]


class TestLoadSynonymRules:
    """Test suite for load_synonym_rules()."""

    def test_load_synonym_rules_should_return_builtin_rules_without_path(self) -> None:
        assert load_synonym_rules(None) == DEFAULT_SYNONYM_RULES

    def test_load_synonym_rules_should_read_json_file(self, tmp_path) -> None:
        # Arrange
        path = tmp_path / "rules.json"
        path.write_text(json.dumps([
            {"triggers": [["parking"]], "expansions": ["car park", "parking permit"]},
        ]))

        # Act
        rules = load_synonym_rules(path)

        # Assert
        assert len(rules) == 1
        assert expand_synonyms("Where is parking?", rules) == ["car park", "parking permit"]

    def test_load_synonym_rules_should_raise_for_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            load_synonym_rules(tmp_path / "missing.json")

    def test_load_synonym_rules_should_raise_for_invalid_rules(self, tmp_path) -> None:
        path = tmp_path / "rules.json"
        path.write_text(json.dumps([{"triggers": [], "expansions": ["x"]}]))

        with pytest.raises(ConfigurationError):
            load_synonym_rules(path)


class TestKeywordAugmenterSearchTerms:
    """Test suite for KeywordAugmenter.search_terms()."""

    def test_search_terms_should_append_synonyms_after_keywords(self) -> None:
        terms = KeywordAugmenter().search_terms("work hours")

        assert terms[:2] == ["work", "hours"]
        assert "office hours" in terms
        assert terms.count("work hours") == 1

    def test_search_terms_should_be_empty_without_keywords(self) -> None:
        assert KeywordAugmenter().search_terms("hi ok") == []
