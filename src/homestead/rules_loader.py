"""Load and save rule overrides as JSON.

Rule files mirror :class:`~homestead.domain.rules_config.RulesConfig`.  Any
section or key left out keeps its default, so a file only needs to name what
it changes::

    {"match": {"starting_gold": 25}, "validation": {"gold_required": [30, 90, 180, 320, 480]}}
"""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter

from homestead.domain.rules_config import RulesConfig

RULES_ADAPTER: TypeAdapter[RulesConfig] = TypeAdapter(RulesConfig)


def parse_rules(data: str | bytes) -> RulesConfig:
    """Validate a JSON document into a rule set.

    Raises:
        pydantic.ValidationError: If a value has the wrong type.
    """

    return RULES_ADAPTER.validate_json(data)


def load_rules(path: Path) -> RulesConfig:
    return parse_rules(Path(path).read_bytes())


def dump_rules(rules: RulesConfig, path: Path | None = None) -> str:
    """Serialise ``rules`` to JSON, writing it to ``path`` when given."""

    text = RULES_ADAPTER.dump_json(rules, indent=2).decode("utf-8")
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
    return text
