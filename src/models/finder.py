"""
Finder protocol

The asset-resolution collaborator the rewriter talks to. Anything with a
matching find() method qualifies.
"""

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class Finder(Protocol):
    def find(self, path: str, search_path: Sequence[str]) -> str:
        """
        Resolve a normalized asset path to its revved counterpart

        Args:
            path: Reference path with query string and fragment removed
            search_path: Directories to consult, in order

        Returns:
            The resolved path. What happens on a miss is up to the
            implementation.
        """
        ...
