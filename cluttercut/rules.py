"""
Rule matching for cluttercut.

The same matcher drives both the engine (authoritative) and the preview
(advisory), so the two always agree on where a file is going.
"""

import json
from pathlib import Path
from typing import Sequence

from .contracts import ConditionType, Rule
from .errors import InvalidRequestError, RuleFileError


def file_extension(file_name: str) -> str:
    """
    Return the lower-cased extension of a file name, without the dot.

    The extension is whatever follows the last dot, provided that dot is not
    the first character. ``"README"`` and ``".bashrc"`` have no extension.
    """
    dot = file_name.rfind(".")
    if dot <= 0:
        return ""
    return file_name[dot + 1:].lower()


def normalize_value(rule: Rule) -> str:
    """Trim the condition value; extension values also lose one leading dot."""
    value = rule.condition_value.strip()
    if rule.condition_type == ConditionType.EXTENSION and value.startswith("."):
        value = value[1:]
    return value.lower()


def rule_matches(file_name: str, rule: Rule) -> bool:
    """
    Check a single rule against a file name.

    Args:
        file_name: Bare file name, e.g. "Report.PDF".
        rule: The rule to evaluate.

    Returns:
        True if the rule's condition holds. Empty condition values and blank
        destinations never match, nor do dot-prefixed ones, which a listing
        would hide.
    """
    value = normalize_value(rule)
    destination = rule.destination_folder.strip()
    if not value or not destination or destination.startswith("."):
        return False

    if rule.condition_type == ConditionType.EXTENSION:
        ext = file_extension(file_name)
        return bool(ext) and ext == value

    if rule.condition_type == ConditionType.NAME_CONTAINS:
        return value in file_name.lower()

    return False


def match_index(file_name: str, rules: Sequence[Rule]) -> int | None:
    """Index of the first rule that matches ``file_name``, or None."""
    for index, rule in enumerate(rules):
        if rule_matches(file_name, rule):
            return index
    return None


def match(file_name: str, rules: Sequence[Rule]) -> Rule | None:
    """
    Return the first rule (in list order) satisfied by ``file_name``.

    Later rules are never evaluated once one matches.
    """
    index = match_index(file_name, rules)
    return rules[index] if index is not None else None


def parse_rules(data) -> list[Rule]:
    """
    Parse rules from JSON-shaped data.

    Accepts either a bare list of rule objects or ``{"rules": [...]}``.

    Raises:
        RuleFileError: If the data is not in one of those shapes or a rule
            is invalid.
    """
    if isinstance(data, dict):
        data = data.get("rules")
    if not isinstance(data, list):
        raise RuleFileError("Rules must be a list or an object with a 'rules' list")

    rules = []
    for i, item in enumerate(data):
        try:
            rules.append(Rule.from_dict(item))
        except InvalidRequestError as e:
            raise RuleFileError(f"Rule #{i + 1}: {e}") from e
    return rules


def load_rules(path: Path) -> list[Rule]:
    """
    Load an ordered rule list from a JSON file.

    Example file::

        [
          {"conditionType": "extension", "conditionValue": "pdf", "destinationFolder": "Documents"},
          {"conditionType": "name_contains", "conditionValue": "invoice", "destinationFolder": "Invoices"}
        ]
    """
    path = Path(path)
    if not path.exists():
        raise RuleFileError(f"Rules file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RuleFileError(f"Rules file is not valid JSON: {path} ({e})") from e
    return parse_rules(data)
