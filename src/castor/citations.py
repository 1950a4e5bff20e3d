"""Citation collation: dedupe source links and render a Sources section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

SOURCES_HEADER = "## Sources"


@dataclass(frozen=True)
class Citation:
    """A source link attached to generated text."""

    url: str
    title: str

    @property
    def key(self) -> str:
        """Identity used for deduplication (exact, case-sensitive)."""
        return f"{self.url}|{self.title}"

    def render(self) -> str:
        return f"- [{self.title}]({self.url})"


def collate_citations(entries: Iterable[Citation | tuple[str, str]]) -> list[str]:
    """Render unique citations as markdown lines in first-seen order.

    Entries may be ``Citation`` objects or plain ``(url, title)`` pairs. The
    result starts with the Sources header and a blank line, or is empty when
    there is nothing to cite.
    """
    seen: set[str] = set()
    lines: list[str] = []
    for entry in entries:
        citation = entry if isinstance(entry, Citation) else Citation(*entry)
        if citation.key in seen:
            continue
        seen.add(citation.key)
        lines.append(citation.render())

    if not lines:
        return []
    return [SOURCES_HEADER, "", *lines]


def append_citations(text: str, entries: Iterable[Citation | tuple[str, str]]) -> str:
    """Append a Sources section to *text*, or return it unchanged."""
    lines = collate_citations(entries)
    if not lines:
        return text
    return text + "\n\n" + "\n".join(lines)
