from __future__ import annotations

"""Rules file loading.

CONTRACT
- Inputs: YAML file path (rules.yaml) or dictionary data
- Outputs (required):
  - RuleSet with named Obfuscators plus header, parameter and field obfuscators
- Invariants:
  - Rule names match `[A-Za-z0-9][A-Za-z0-9_.-]{0,63}`
  - A rule may be referenced by name wherever a rule is expected
  - Every Obfuscator is built once and shared between references
- Failure:
  - Raises InvalidConfiguration on invalid schema, unknown or cyclic references,
    or invalid rule values
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .integrations.error_strategy import ErrorStrategy
from .integrations.http_headers import HttpHeaderObfuscator, http_headers
from .integrations.http_parameters import HttpParameterObfuscator, http_parameters
from .integrations.maps import MapObfuscator, maps
from .obfuscator import InvalidConfiguration, Obfuscator
from .obfuscators import DEFAULT_MASK, all_characters, none, with_fixed_length, with_fixed_value
from .portion import PortionBuilder
from .splitpoint import at_first, at_last, at_nth

_RULE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$")

RULES_SCHEMA = {
    "type": "object",
    "$defs": {
        "rule": {
            "oneOf": [
                {"type": "string"},
                {"$ref": "#/$defs/node"},
            ]
        },
        "node": {
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "enum": ["all", "none", "fixed_length", "fixed_value", "portion", "chain", "split"],
                },
                "mask": {"type": "string"},
                "length": {"type": "integer"},
                "value": {"type": "string"},
                "links": {
                    "type": "array",
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "properties": {
                            "rule": {"$ref": "#/$defs/rule"},
                            "until_length": {"type": "integer"},
                        },
                        "required": ["rule", "until_length"],
                        "additionalProperties": False,
                    },
                },
                "then": {"$ref": "#/$defs/rule"},
                "at": {"type": "string", "enum": ["first", "last", "nth"]},
                "separator": {"type": "string"},
                "occurrence": {"type": "integer"},
                "before": {"$ref": "#/$defs/rule"},
                "after": {"$ref": "#/$defs/rule"},
            },
            "required": ["type"],
        },
        "bindings": {
            "type": "object",
            "additionalProperties": {"$ref": "#/$defs/rule"},
        },
    },
    "properties": {
        "rules": {"type": "object", "additionalProperties": {"$ref": "#/$defs/rule"}},
        "headers": {"$ref": "#/$defs/bindings"},
        "parameters": {"$ref": "#/$defs/bindings"},
        "fields": {"$ref": "#/$defs/bindings"},
        "on_error": {"type": "string", "enum": [s.value for s in ErrorStrategy]},
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class RuleSet:
    rules: dict[str, Obfuscator] = field(default_factory=dict)
    headers: HttpHeaderObfuscator = field(default_factory=HttpHeaderObfuscator)
    parameters: HttpParameterObfuscator = field(default_factory=HttpParameterObfuscator)
    fields: MapObfuscator[str] = field(default_factory=MapObfuscator)
    on_error: ErrorStrategy = ErrorStrategy.LOG

    def rule(self, name: str) -> Obfuscator:
        try:
            return self.rules[name]
        except KeyError:
            known = ", ".join(sorted(self.rules)) or "<none>"
            raise KeyError(f"Unknown rule {name!r} (known: {known})") from None


class _RuleBuilder:
    """Builds rule nodes, resolving named references with cycle detection."""

    def __init__(self, raw_rules: Mapping[str, Any]):
        self.raw_rules = raw_rules
        self.built: dict[str, Obfuscator] = {}
        self._resolving: list[str] = []

    def named(self, name: str) -> Obfuscator:
        if name in self.built:
            return self.built[name]
        if name not in self.raw_rules:
            raise InvalidConfiguration(f"Unknown rule reference: {name!r}")
        if name in self._resolving:
            cycle = " -> ".join([*self._resolving, name])
            raise InvalidConfiguration(f"Cyclic rule reference: {cycle}")
        self._resolving.append(name)
        try:
            obfuscator = self.build(self.raw_rules[name])
        finally:
            self._resolving.pop()
        self.built[name] = obfuscator
        return obfuscator

    def build(self, node: str | Mapping[str, Any]) -> Obfuscator:
        if isinstance(node, str):
            return self.named(node)
        kind = node["type"]
        if kind == "all":
            return all_characters(str(node.get("mask", DEFAULT_MASK)))
        if kind == "none":
            return none()
        if kind == "fixed_length":
            if "length" not in node:
                raise InvalidConfiguration("fixed_length rule requires 'length'")
            return with_fixed_length(int(node["length"]), str(node.get("mask", DEFAULT_MASK)))
        if kind == "fixed_value":
            if "value" not in node:
                raise InvalidConfiguration("fixed_value rule requires 'value'")
            return with_fixed_value(str(node["value"]))
        if kind == "portion":
            options = {k: v for k, v in node.items() if k != "type"}
            return PortionBuilder.from_options(options).build()
        if kind == "chain":
            return self._chain(node)
        if kind == "split":
            return self._split(node)
        raise InvalidConfiguration(f"Unknown rule type: {kind!r}")

    def _chain(self, node: Mapping[str, Any]) -> Obfuscator:
        links = node.get("links") or []
        if not links or "then" not in node:
            raise InvalidConfiguration("chain rule requires 'links' and 'then'")
        first = links[0]
        prefix = self.build(first["rule"]).until_length(int(first["until_length"]))
        for link in links[1:]:
            prefix = prefix.then(self.build(link["rule"])).until_length(int(link["until_length"]))
        return prefix.then(self.build(node["then"]))

    def _split(self, node: Mapping[str, Any]) -> Obfuscator:
        if "separator" not in node or "before" not in node:
            raise InvalidConfiguration("split rule requires 'separator' and 'before'")
        separator = str(node["separator"])
        at = str(node.get("at", "first"))
        if at == "first":
            point = at_first(separator)
        elif at == "last":
            point = at_last(separator)
        else:
            point = at_nth(separator, int(node.get("occurrence", 0)))
        after = self.build(node["after"]) if "after" in node else none()
        return point.split_to(self.build(node["before"]), after)


def build_rule(node: str | Mapping[str, Any], rules: Mapping[str, Any] | None = None) -> Obfuscator:
    """Build a single rule node; string nodes refer to entries in `rules`."""
    return _RuleBuilder(rules or {}).build(node)


def load_rules(data: Mapping[str, Any]) -> RuleSet:
    import jsonschema  # lazy import

    try:
        jsonschema.validate(instance=data, schema=RULES_SCHEMA)
    except jsonschema.ValidationError as e:
        raise InvalidConfiguration(f"Invalid rules file schema: {e.message}") from e

    raw_rules = dict(data.get("rules", {}) or {})
    for name in raw_rules:
        if not isinstance(name, str) or not _RULE_NAME_RE.fullmatch(name):
            raise InvalidConfiguration(
                f"Invalid rule name {name!r}. Use 1-64 chars: letters/digits, plus '_.-'."
            )

    builder = _RuleBuilder(raw_rules)
    rules = {name: builder.named(name) for name in raw_rules}

    def bindings(section: str) -> dict[str, Obfuscator]:
        return {key: builder.build(node) for key, node in (data.get(section) or {}).items()}

    on_error = ErrorStrategy.parse(str(data.get("on_error", ErrorStrategy.LOG.value)))
    return RuleSet(
        rules=rules,
        headers=http_headers(bindings("headers")),
        parameters=http_parameters(bindings("parameters"), on_error=on_error),
        fields=maps(bindings("fields")),
        on_error=on_error,
    )


def load_rules_file(path: Path) -> RuleSet:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Rules file must contain a mapping: {path}")
    rule_set = load_rules(data)
    logger.debug("Loaded {} rules from {}", len(rule_set.rules), path)
    return rule_set


if __name__ == "__main__":
    import argparse
    import sys

    parser = argparse.ArgumentParser(description="Rules file loader CLI")
    parser.add_argument("--rules", required=True, help="Path to rules.yaml")
    args = parser.parse_args()

    try:
        rs = load_rules_file(Path(args.rules))
        print(f"Loaded {len(rs.rules)} rules.")
        for rule_name, rule in rs.rules.items():
            print(f"  {rule_name}: {type(rule).__name__}")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
