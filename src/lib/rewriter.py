"""
Reference rewriting

Scans document text with each pattern of a catalogue and swaps every matched
asset reference for the path the Finder resolves it to. Query strings and
fragments of the original reference are always kept.

Example:
    With a finder mapping "app.js" to "app-ab12cd.js":

    >>> rewriter = ReferenceRewriter(finder)
    >>> rewriter.rewrite('<script src="app.js?v=3">', catalog.resolve("html"), [])
    '<script src="app-ab12cd.js?v=3">'
"""

import re
from typing import Callable, Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

from ..models.finder import Finder
from ..models.patterns import Pattern
from .log import LOG


def log_discard(message: str) -> None:
    """Default log sink"""
    pass


class ReferenceRewriter:
    """
    Applies patterns to text, resolving each captured reference

    Patterns are applied one after the other, each on the output of the
    previous one, so a later pattern sees what an earlier one wrote.
    """

    def __init__(self, finder: Finder, log: Optional[Callable[[str], None]] = None) -> None:
        """
        Args:
            finder: Resolves normalized paths to revved paths
            log: Single-argument sink for progress messages (no-op default)
        """
        self.finder = finder
        self.log = log or log_discard

    def rewrite(
        self,
        content: str,
        patterns: Sequence[Pattern],
        search_path: Sequence[str],
    ) -> str:
        """
        Rewrite every reference matched by the patterns

        Args:
            content: Text to rewrite
            patterns: Ordered patterns to apply
            search_path: Directories handed to the finder

        Returns:
            The rewritten text
        """
        for pattern in patterns:
            content = self.pattern_apply(content, pattern, search_path)
        return content

    def pattern_apply(self, content: str, pattern: Pattern, search_path: Sequence[str]) -> str:
        """Apply a single pattern to the whole text"""
        self.log(pattern.description)

        def match_rewrite(match: re.Match[str]) -> str:
            """Swap the captured reference inside the match"""
            reference = match.group(1)
            rewritten = self.reference_resolve(reference, pattern, search_path)

            # Offsets of the captured group, relative to the match
            start = match.start(1) - match.start()
            end = match.end(1) - match.start()
            original = match.group(0)
            result = original[:start] + rewritten + original[end:]

            if rewritten != reference:
                self.log(f"{original} changed to {result}")
            return result

        return pattern.matcher.sub(match_rewrite, content)

    def reference_resolve(self, reference: str, pattern: Pattern, search_path: Sequence[str]) -> str:
        """
        Resolve one reference

        The path part goes through the pattern's filters and the finder; the
        query string and fragment of the reference are put back unchanged.
        """
        normalized = pattern.filter_in(reference)
        parts = urlsplit(normalized)
        path_only = urlunsplit(parts._replace(query="", fragment=""))

        LOG(f"Looking for revved version of {path_only} in {list(search_path)}", level=3)
        resolved = self.finder.find(path_only, search_path)
        LOG(f"Found file '{resolved}'", level=3)

        out = urlsplit(pattern.filter_out(resolved))
        rewritten = urlunsplit(out._replace(query="", fragment=""))

        # Keep bare "?" and "#" markers too (e.g. the "font.eot?#iefix" hack)
        path_part, hash_mark, _ = normalized.partition("#")
        if "?" in path_part:
            rewritten += "?" + parts.query
        if hash_mark:
            rewritten += "#" + parts.fragment
        return rewritten
