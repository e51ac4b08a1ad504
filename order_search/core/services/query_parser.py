"""Free-text query tokenization."""

from __future__ import annotations

import re

# A double-quoted phrase, or a run of non-space characters. Inside a run a
# quote is literal unless it opens a closed phrase, so unmatched quotes stay
# part of the surrounding token.
_TOKEN_RE = re.compile(r'"([^"]+)"|((?:[^\s"]|"(?![^"]+"))+)')


class QueryParser:
    """Split a search query into independently matched terms."""

    def parse(self, query: str) -> list[str]:
        """Parse a raw query into an ordered list of terms.

        Quoted phrases ("New York") become a single term with their whitespace
        kept as typed. Everything else is split on whitespace. The parser
        never fails: an empty or blank query gives an empty list.

        Args:
            query: Raw user input.

        Returns:
            Non-empty terms in query order.
        """
        if not query:
            return []

        terms = []
        for match in _TOKEN_RE.finditer(query):
            phrase, word = match.groups()
            if phrase is not None:
                if phrase.strip():
                    terms.append(phrase)
            else:
                terms.append(word)
        return terms
