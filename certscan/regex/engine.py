"""YAML regex rules for extra certificate fields (card numbers, registration ids)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import yaml

from ..extract.schemas import Confidence

LOGGER = logging.getLogger("certscan.rules")

ValidatorFn = Callable[[str, Dict[str, Any]], bool]
PluginFn = Callable[[str, Dict[str, Any]], Dict[str, Any]]

_FLAG_MAP = {
    "I": re.IGNORECASE,
    "M": re.MULTILINE,
    "S": re.DOTALL,
    "X": re.VERBOSE,
    "A": re.ASCII,
}


@dataclass
class RegexRule:
    name: str
    pattern: str = ""
    group: int = 0
    output_field: Optional[str] = None
    confidence: Optional[str] = None
    flags: Optional[str] = None
    plugin: Optional[str] = None
    validators: Optional[List[str]] = None
    find_all: bool = False

    @property
    def field(self) -> str:
        return self.output_field or self.name


def _parse_flags(flag_str: Optional[str]) -> int:
    flags = 0
    for ch in flag_str or "":
        flags |= _FLAG_MAP.get(ch.upper(), 0)
    return flags


def load_rules(path: Path) -> List[RegexRule]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or []
    if not isinstance(data, list):
        raise ValueError(f"Rules file must contain a list of rules: {path}")
    rules: List[RegexRule] = []
    for item in data:
        if not item.get("name"):
            raise ValueError(f"Rule without a name in {path}: {item!r}")
        rules.append(
            RegexRule(
                name=item["name"],
                pattern=item.get("pattern", ""),
                group=int(item.get("group", 0)),
                output_field=item.get("output_field"),
                confidence=Confidence(item["confidence"]).value if item.get("confidence") else None,
                flags=item.get("flags"),
                plugin=item.get("plugin"),
                validators=item.get("validators"),
                find_all=bool(item.get("find_all", False)),
            )
        )
    LOGGER.debug("Loaded %d regex rules from %s", len(rules), path)
    return rules


def _run_validators(
    value: str,
    validators: Optional[List[str]],
    registry: Dict[str, ValidatorFn],
    ctx: Dict[str, Any],
) -> bool:
    for name in validators or []:
        fn = registry.get(name)
        if fn is None:
            LOGGER.warning("Unknown validator %r; rejecting value", name)
            return False
        if not fn(value, ctx):
            return False
    return True


def run_rules(
    text: str,
    rules: Iterable[RegexRule],
    plugins: Optional[Dict[str, PluginFn]] = None,
    validators: Optional[Dict[str, ValidatorFn]] = None,
    *,
    debug: bool = False,
) -> Dict[str, Any]:
    """Run regex rules over text and return extracted fields.

    A rule either names a plugin or carries a pattern. With ``find_all`` every
    validated match is collected into a list. If debug is True, a
    ``"__debug__"`` list with match details is included.
    """
    results: Dict[str, Any] = {}
    debug_rows: List[Dict[str, Any]] = []
    default_plugins, default_validators = _default_registries()
    if plugins is None:
        plugins = default_plugins
    if validators is None:
        validators = default_validators

    ctx: Dict[str, Any] = {"results": results, "text": text}

    for rule in rules:
        if rule.plugin:
            plugin = plugins.get(rule.plugin)
            if plugin is None:
                LOGGER.warning("Unknown plugin %r in rule %r", rule.plugin, rule.name)
                continue
            plugin_out = plugin(text, results)
            results.update(plugin_out)
            if debug:
                debug_rows.append({"rule": rule.name, "plugin": rule.plugin, "output": plugin_out})
            continue
        if not rule.pattern:
            continue

        compiled = re.compile(rule.pattern, _parse_flags(rule.flags))
        accepted: List[str] = []
        for match in compiled.finditer(text):
            value = match.group(rule.group).strip()
            valid = _run_validators(value, rule.validators, validators, ctx)
            if debug:
                debug_rows.append(
                    {
                        "rule": rule.name,
                        "field": rule.field,
                        "value": value,
                        "confidence": rule.confidence,
                        "span": match.span(rule.group),
                        "valid": valid,
                    }
                )
            if not valid:
                continue
            accepted.append(value)
            if not rule.find_all:
                break

        if not accepted:
            continue
        results[rule.field] = accepted if rule.find_all else accepted[0]
        if rule.confidence is not None:
            results[f"{rule.field}_confidence"] = rule.confidence

    if debug:
        results["__debug__"] = debug_rows
    return results


def _default_registries() -> Tuple[Dict[str, PluginFn], Dict[str, ValidatorFn]]:
    from . import plugins as plugin_mod

    return dict(plugin_mod.PLUGINS), dict(plugin_mod.VALIDATORS)
