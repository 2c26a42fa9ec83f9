"""Identifier rules for generated C# code."""

import re
from typing import Dict, Iterable, List

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")

PASCAL_CASE = "pascalCase"
CAMEL_CASE = "camelCase"
PRESERVE = "preserve"


def sanitize_identifier(name: str, fallback: str = "Activity", prefix: str = "Activity_") -> str:
    """Reduce free text to a C# identifier.

    Only ASCII letters, digits and underscores are kept. A result that
    does not start with a letter gets ``prefix``; an empty result becomes
    ``fallback``.
    """
    cleaned = _INVALID_CHARS.sub("", name or "")
    if not cleaned:
        return fallback
    if not cleaned[0].isalpha():
        cleaned = prefix + cleaned
    return cleaned


def apply_naming_style(identifier: str, style: str = PASCAL_CASE) -> str:
    if not identifier or style == PRESERVE:
        return identifier
    if style == CAMEL_CASE:
        return identifier[0].lower() + identifier[1:]
    return identifier[0].upper() + identifier[1:]


def unique_identifiers(names: Iterable[str]) -> List[str]:
    """De-duplicate identifiers in order: Foo, Foo -> Foo, Foo_2.

    Comparison ignores case, so no two results differ only in case.
    """
    seen: Dict[str, int] = {}
    taken = set()
    result = []
    for name in names:
        key = name.lower()
        candidate = name
        count = seen.get(key, 1)
        while candidate.lower() in taken:
            count += 1
            candidate = f"{name}_{count}"
        seen[key] = count
        taken.add(candidate.lower())
        result.append(candidate)
    return result


def sanitize_class_prefix(prefix: str) -> str:
    """Reduce a free-text class prefix to characters valid inside an identifier.

    Leading digits are dropped.
    """
    return _INVALID_CHARS.sub("", prefix or "").lstrip("0123456789")


def workflow_class_name(process_name: str, style: str = PASCAL_CASE, class_prefix: str = "") -> str:
    base = apply_naming_style(
        sanitize_identifier(process_name, fallback="Process", prefix="Process_"), style
    )
    return f"{sanitize_class_prefix(class_prefix)}{base}Workflow"


def activity_identifiers(activity_names: Iterable[str], style: str = PASCAL_CASE) -> List[str]:
    """Sanitized, styled and de-duplicated identifiers, one per activity."""
    return unique_identifiers(
        apply_naming_style(sanitize_identifier(name), style) for name in activity_names
    )
