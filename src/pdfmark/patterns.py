"""Heading pattern definitions, validation and compilation."""

import dataclasses
import uuid
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path
from typing import Any

import regex
import yaml

from pdfmark.errors import PatternCompileError
from pdfmark.models import CompiledMatcher, HeadingPattern

HEADING_LEVELS = (1, 2, 3)

# MULTILINE, case-sensitive; str patterns are Unicode-aware in `regex`
_FLAGS = regex.MULTILINE


def _load_pattern_file(filepath: Path) -> list[dict[str, Any]]:
    """Load the raw pattern mappings from a YAML file."""
    try:
        with filepath.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{filepath}: not valid YAML ({e})") from e
    if not isinstance(data, dict):
        raise ValueError(f"{filepath}: expected a mapping with a 'patterns' key")
    entries = data.get("patterns", [])
    if not isinstance(entries, list):
        raise ValueError(f"{filepath}: 'patterns' must be a list")
    return entries


@lru_cache(maxsize=1)
def _get_builtin_patterns() -> tuple[HeadingPattern, ...]:
    """Get the packaged default patterns (cached)."""
    data_dir = Path(__file__).parent / "data"
    entries = _load_pattern_file(data_dir / "default_patterns.yaml")
    return tuple(
        create_pattern(
            label=e["label"],
            pattern=e["pattern"],
            level=e["level"],
            id=e["id"],
            builtin=True,
        )
        for e in entries
    )


def default_patterns() -> list[HeadingPattern]:
    """Return the built-in heading patterns (chapter, section, subsection)."""
    return list(_get_builtin_patterns())


def validate_pattern(source: str) -> None:
    """Raise PatternCompileError if `source` is not a valid expression."""
    try:
        regex.compile(source, _FLAGS)
    except regex.error as e:
        raise PatternCompileError(source, str(e)) from e


def create_pattern(
    label: str,
    pattern: str,
    level: int,
    *,
    enabled: bool = True,
    id: str | None = None,
    builtin: bool = False,
) -> HeadingPattern:
    """
    Create a validated heading pattern.

    Invalid expressions are rejected here, at authoring time, so that
    compile_patterns() never has to deal with them.
    """
    if level not in HEADING_LEVELS:
        raise ValueError(f"Heading level must be 1, 2 or 3, got {level!r}")
    validate_pattern(pattern)
    return HeadingPattern(
        id=id or f"custom-{uuid.uuid4().hex[:8]}",
        label=label,
        pattern=pattern,
        level=level,
        enabled=enabled,
        builtin=builtin,
    )


def compile_patterns(patterns: Iterable[HeadingPattern]) -> list[CompiledMatcher]:
    """
    Compile enabled patterns, deepest level first.

    Subsection patterns get the first chance at each line, then sections,
    then chapters. Patterns of equal level keep their relative order.
    """
    enabled = [p for p in patterns if p.enabled]
    enabled.sort(key=lambda p: p.level, reverse=True)
    return [
        CompiledMatcher(regex=regex.compile(p.pattern, _FLAGS), level=p.level)
        for p in enabled
    ]


def set_enabled(
    patterns: Iterable[HeadingPattern], ids: Iterable[str], enabled: bool
) -> list[HeadingPattern]:
    """Return a copy of `patterns` with the given ids switched on or off."""
    wanted = set(ids)
    result = []
    for p in patterns:
        if p.id in wanted:
            wanted.discard(p.id)
            p = dataclasses.replace(p, enabled=enabled)
        result.append(p)
    if wanted:
        raise ValueError(f"Unknown pattern id(s): {', '.join(sorted(wanted))}")
    return result


def load_patterns(path: Path) -> list[HeadingPattern]:
    """
    Load user-authored patterns from a YAML file.

    Expected format:

        patterns:
          - label: Appendix
            pattern: '^(?<title>Appendix [A-Z].+)$'
            level: 1
            enabled: true   # optional
            id: appendix    # optional

    Every entry is validated; the first invalid one raises. Ids must be
    unique within the file.
    """
    result: list[HeadingPattern] = []
    for i, entry in enumerate(_load_pattern_file(path)):
        try:
            label = str(entry["label"])
            source = str(entry["pattern"])
            level = int(entry["level"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"{path}: pattern #{i + 1} is malformed ({e})") from e
        enabled = entry.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError(
                f"{path}: pattern #{i + 1} has non-boolean enabled: {enabled!r}"
            )
        pattern_id = entry.get("id")
        if pattern_id is not None:
            pattern_id = str(pattern_id)
        result.append(
            create_pattern(
                label=label,
                pattern=source,
                level=level,
                enabled=enabled,
                id=pattern_id,
            )
        )
    seen: set[str] = set()
    for p in result:
        if p.id in seen:
            raise ValueError(f"{path}: duplicate pattern id '{p.id}'")
        seen.add(p.id)
    return result


def merge_patterns(
    patterns: Iterable[HeadingPattern], extra: Iterable[HeadingPattern]
) -> list[HeadingPattern]:
    """Append `extra` to `patterns`, rejecting ids that are already taken."""
    result = list(patterns)
    taken = {p.id for p in result}
    for p in extra:
        if p.id in taken:
            raise ValueError(f"Pattern id '{p.id}' is already in use")
        taken.add(p.id)
        result.append(p)
    return result


def save_patterns(path: Path, patterns: Iterable[HeadingPattern]) -> None:
    """Write the custom (non-builtin) patterns to a YAML file."""
    entries = [
        {
            "id": p.id,
            "label": p.label,
            "pattern": p.pattern,
            "level": p.level,
            "enabled": p.enabled,
        }
        for p in patterns
        if not p.builtin
    ]
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            {"patterns": entries}, f, allow_unicode=True, sort_keys=False
        )
