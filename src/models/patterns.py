"""
Reference-matching pattern model

A Pattern pairs a regular expression with the two optional normalization
hooks applied around asset resolution.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Union


def identity(value: str) -> str:
    """Default filter - return the value untouched"""
    return value


@dataclass(frozen=True)
class Pattern:
    r"""
    One class of asset reference to rewrite

    Attributes:
        matcher: Regular expression with exactly one capture group; the group
                 spans the reference to resolve (e.g. the value of a src="...")
        description: Human-readable line emitted to the log sink before the
                     pattern is applied
        filter_in: Normalizes the captured reference before it is resolved
        filter_out: Normalizes the resolved path before it is written back

    A matcher given as a string is compiled with re.MULTILINE.

    Example:
        Pattern(r"url\(([^)]+)\)", "Update url() references")
    """
    matcher: Union[str, "re.Pattern[str]"]
    description: str
    filter_in: Callable[[str], str] = field(default=identity)
    filter_out: Callable[[str], str] = field(default=identity)

    def __post_init__(self) -> None:
        if isinstance(self.matcher, str):
            object.__setattr__(self, "matcher", re.compile(self.matcher, re.MULTILINE))
