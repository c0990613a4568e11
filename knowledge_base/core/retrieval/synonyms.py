"""
Query synonym rules.

A rule fires when the lowercased query contains every substring of at least
one of its trigger groups; its expansions are then added as keyword terms.
Rules are data and can be loaded from a JSON file.

Dependencies: pydantic
System role: Keyword query expansion
"""

import logging
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, Field, TypeAdapter

from knowledge_base.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SynonymRule(BaseModel):
    """
    One synonym expansion rule.

    Attributes:
        triggers: Groups of substrings; any fully-present group fires the rule
        expansions: Terms added when the rule fires
    """

    triggers: list[list[str]] = Field(min_length=1)
    expansions: list[str] = Field(min_length=1)

    def matches(self, query: str) -> bool:
        lowered = query.lower()
        return any(
            all(part.lower() in lowered for part in group)
            for group in self.triggers
            if group
        )


DEFAULT_SYNONYM_RULES: list[SynonymRule] = [
    SynonymRule(
        triggers=[["work hour"], ["work", "hour"]],
        expansions=[
            "work hours",
            "working hours",
            "business hours",
            "hours of work",
            "office hours",
            "core hours",
            "operating hours",
            "standard hours",
            "working time",
            "work schedule",
            "start time",
            "end time",
            "9-5",
            "9 to 5",
        ],
    ),
]

_RULES_ADAPTER = TypeAdapter(list[SynonymRule])


def load_synonym_rules(path: str | Path | None = None) -> list[SynonymRule]:
    """
    Load synonym rules from a JSON file.

    Args:
        path: JSON file holding a list of {"triggers", "expansions"} objects;
            None returns the built-in rules

    Raises:
        ConfigurationError: File missing or not a valid rule list
    """
    if path is None:
        return list(DEFAULT_SYNONYM_RULES)

    rules_path = Path(path)
    try:
        rules = _RULES_ADAPTER.validate_json(rules_path.read_bytes())
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Could not load synonym rules from {rules_path}: {e}",
            setting="RETRIEVAL_SYNONYM_RULES_PATH",
        ) from e

    logger.info(f"{__name__}:load_synonym_rules - Loaded {len(rules)} rules from {rules_path}")
    return rules


def expand_synonyms(query: str, rules: Sequence[SynonymRule]) -> list[str]:
    """Return the expansions of every rule the query fires, deduplicated in order."""
    expansions: list[str] = []
    for rule in rules:
        if rule.matches(query):
            for term in rule.expansions:
                if term not in expansions:
                    expansions.append(term)
    return expansions
