"""Text filters over view labels."""

from __future__ import annotations

import logging
import re
from enum import IntEnum
from typing import Callable

from crv_common.errors import FilterConfigurationError
from crv_core.models import Forest, TreeNode

logger = logging.getLogger(__name__)

Predicate = Callable[[str], bool]


class MatchMode(IntEnum):
    CONTAINS = 0
    STARTS_WITH = 1
    ENDS_WITH = 2
    EQUALS = 3
    GLOB = 4
    REGEX = 5

    @classmethod
    def parse(cls, value: "MatchMode | int | str") -> "MatchMode":
        """Accept a member, its index, or its name (``starts-with``)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise FilterConfigurationError(
                "Invalid mode value", context={"mode": value}
            )
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as exc:
                raise FilterConfigurationError(
                    "Invalid mode value", context={"mode": value}, cause=exc
                ) from exc
        if isinstance(value, str):
            token = value.strip().replace("-", "_").upper()
            if token.isdigit():
                return cls.parse(int(token))
            if token in cls.__members__:
                return cls[token]
        raise FilterConfigurationError(
            "Invalid mode value",
            context={"mode": value, "choices": [m.name.lower() for m in cls]},
        )


def glob_to_regex(glob: str) -> str:
    """Translate ``*`` and ``?`` wildcards to an anchored expression."""
    parts = ["^"]
    for char in glob:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    parts.append("$")
    return "".join(parts)


def _compile_regex(expression: str, flags: int, pattern: str) -> re.Pattern[str]:
    # Oversized repeat counts and deeply nested groups escape re.error
    try:
        return re.compile(expression, flags)
    except (re.error, OverflowError, RecursionError) as exc:
        raise FilterConfigurationError(
            f"Invalid pattern {pattern!r}: {exc}",
            context={"pattern": pattern},
            cause=exc,
        ) from exc


def compile_filter(
    pattern: str,
    mode: MatchMode | int | str = MatchMode.CONTAINS,
    case_sensitive: bool = False,
) -> Predicate:
    """Build a label predicate for ``pattern`` under ``mode``.

    Without ``case_sensitive`` the literal and glob modes compare both sides
    case-folded (``STRASSE`` matches ``Straße``). Regex mode uses
    ``re.IGNORECASE``, since folding an expression would rewrite its escapes.
    """
    mode = MatchMode.parse(mode)
    fold: Callable[[str], str] = (lambda text: text) if case_sensitive else str.casefold
    needle = fold(pattern)

    match mode:
        case MatchMode.CONTAINS:
            return lambda label: needle in fold(label)
        case MatchMode.STARTS_WITH:
            return lambda label: fold(label).startswith(needle)
        case MatchMode.ENDS_WITH:
            return lambda label: fold(label).endswith(needle)
        case MatchMode.EQUALS:
            return lambda label: fold(label) == needle
        case MatchMode.GLOB:
            regex = _compile_regex(glob_to_regex(needle), 0, pattern)
            return lambda label: regex.match(fold(label)) is not None
        case MatchMode.REGEX:
            flags = 0 if case_sensitive else re.IGNORECASE
            regex = _compile_regex(pattern, flags, pattern)
            return lambda label: regex.search(label) is not None
    raise FilterConfigurationError("Invalid mode value", context={"mode": mode})


def node_matches(node: TreeNode, predicate: Predicate) -> bool:
    """True if ``node`` or one of its direct children matches.

    Grandchildren are never inspected.
    """
    if predicate(node.label):
        return True
    return any(predicate(child.label) for child in node.children)


def filter_forest(forest: Forest, predicate: Predicate) -> Forest:
    """Return the subsequence of ``forest``'s roots that match.

    Kept roots are the baseline's own node objects with their subtrees
    untouched.
    """
    roots = tuple(node for node in forest.roots if node_matches(node, predicate))
    logger.debug("Filter kept %d of %d roots in %s", len(roots), len(forest), forest.title)
    return forest.with_roots(roots)
