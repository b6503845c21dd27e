"""Regex-driven syntax highlighter producing ``syntax-*`` HTML spans.

Every category pattern of the language is scanned independently over the raw
code. The resulting matches are sorted and filtered so that the kept set is
non-overlapping; each kept match becomes one span, all other text is escaped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vexdocs.markdown.escape import escape_code
from vexdocs.markdown.languages import LanguagePatterns, get_patterns

if TYPE_CHECKING:
    from collections.abc import Iterable

# Lower value wins when two matches start at the same offset.
CATEGORY_PRIORITY: dict[str, int] = {
    "comment": 1,
    "string": 2,
    "template-literal": 2,
    "number": 3,
    "keyword": 4,
    "type": 4,
    "decorator": 4,
    "annotation": 4,
    "selector": 4,
    "pseudo-class": 4,
    "pseudo-element": 4,
    "attribute": 4,
    "tag": 4,
    "doctype": 4,
    "function": 5,
    "variable": 6,
    "punctuation": 7,
    "operator": 7,
}

LOWEST_PRIORITY = 7


@dataclass(frozen=True)
class TokenMatch:
    """A categorized span ``[start, end)`` of the original code."""

    start: int
    end: int
    text: str
    category: str
    priority: int
    order: int = 0  # declaration index of the category in its pattern set

    def overlaps(self, other: TokenMatch) -> bool:
        return self.start < other.end and other.start < self.end


def collect_matches(code: str, language: LanguagePatterns) -> list[TokenMatch]:
    """Scan code with every category pattern; empty matches are ignored."""
    matches: list[TokenMatch] = []
    for order, (category, pattern) in enumerate(language.patterns.items()):
        priority = CATEGORY_PRIORITY.get(category, LOWEST_PRIORITY)
        for m in pattern.finditer(code):
            if m.end() == m.start():
                continue
            matches.append(
                TokenMatch(
                    start=m.start(),
                    end=m.end(),
                    text=m.group(0),
                    category=category,
                    priority=priority,
                    order=order,
                )
            )
    return matches


def resolve_overlaps(matches: Iterable[TokenMatch]) -> list[TokenMatch]:
    """Return the greedy non-overlapping subset of matches, ordered by start.

    Matches are ranked by start offset, then priority, then length (longest
    first), then category declaration order. A match is kept only if it does
    not overlap an already kept one; losers are dropped, never truncated.
    """
    ranked = sorted(matches, key=lambda t: (t.start, t.priority, t.start - t.end, t.order))
    kept: list[TokenMatch] = []
    # Kept spans are disjoint and sorted, so only the last end matters.
    last_end = 0
    for match in ranked:
        if match.start < last_end:
            continue
        kept.append(match)
        last_end = match.end
    return kept


def render_tokens(code: str, tokens: list[TokenMatch]) -> str:
    """Serialize code with the given disjoint, sorted tokens wrapped in spans."""
    parts: list[str] = []
    pos = 0
    for token in tokens:
        parts.append(escape_code(code[pos : token.start]))
        parts.append(f'<span class="syntax-{token.category}">{escape_code(token.text)}</span>')
        pos = token.end
    parts.append(escape_code(code[pos:]))
    return "".join(parts)


def highlight(code: str, language: str | None) -> str:
    """Highlight code for a language tag; unknown tags use the JavaScript set."""
    if not code:
        return ""
    patterns = get_patterns(language)
    tokens = resolve_overlaps(collect_matches(code, patterns))
    return render_tokens(code, tokens)
