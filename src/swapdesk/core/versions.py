"""Parsing helpers for ``swapenv version ls`` output."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["VersionEntry", "parse_version_listing"]

_MARKER_PATTERN = re.compile(r"^[\s*]+")


@dataclass(frozen=True, slots=True)
class VersionEntry:
    label: str
    version: str
    latest: bool = False


def parse_version_listing(text: str | None) -> list[VersionEntry]:
    """Split the listing into picker entries, newest first.

    The first non-blank line is flagged as the latest release. Leading
    whitespace and ``*`` markers (the tool's "current" indicator) are
    stripped to recover the literal version identifier.
    """

    if not text:
        return []
    lines = [line for line in text.split("\n") if line.strip()]
    entries: list[VersionEntry] = []
    for index, line in enumerate(lines):
        version = _MARKER_PATTERN.sub("", line).strip()
        if not version:
            continue
        if index == 0:
            entries.append(VersionEntry(label=f"* {line.strip()} [latest]", version=version, latest=True))
        else:
            entries.append(VersionEntry(label=f"  {line.strip()}", version=version))
    return entries
