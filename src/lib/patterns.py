"""
Pattern catalogue for asset references

Holds the ordered reference-matching rules for each document type and
resolves a caller's selector (a preset name or a literal list of patterns)
into the patterns a ReferenceRewriter applies.
"""

import re
from typing import Dict, List, Sequence, Union

from ..models.patterns import Pattern
from .errors import ConfigError


PatternSelector = Union[str, Sequence[Pattern]]


def dataMain_filterIn(reference: str) -> str:
    """data-main names a RequireJS module: look it up as a .js file"""
    return reference if reference.endswith(".js") else reference + ".js"


def dataMain_filterOut(resolved: str) -> str:
    """Drop the .js suffix again so the module name convention is kept"""
    return resolved[:-len(".js")] if resolved.endswith(".js") else resolved


class PatternCatalog:
    """
    Registry of pattern presets

    Maps a document type ("html", "css") to the ordered list of patterns
    used to rewrite its references. Order matters: each pattern runs on the
    output of the previous one.

    A frozen catalogue rejects register(); the shared module-level one is
    frozen so callers cannot change the presets every Processor defaults to.
    """

    def __init__(self, frozen: bool = False) -> None:
        """Initialize the catalogue and register the built-in presets"""
        self.frozen: bool = False
        self.presets: Dict[str, List[Pattern]] = {}
        self.htmlPatterns_register()
        self.cssPatterns_register()
        self.frozen = frozen

    def register(self, name: str, patterns: Sequence[Pattern]) -> None:
        """Register (or replace) a preset"""
        if self.frozen:
            raise ConfigError("Preset catalogue is read-only; build a PatternCatalog() to register presets")
        self.presets[name] = list(patterns)

    def names(self) -> List[str]:
        """Names of the registered presets"""
        return list(self.presets)

    def resolve(self, selector: PatternSelector) -> List[Pattern]:
        """
        Turn a selector into an ordered list of patterns

        Args:
            selector: Preset name, or a sequence of Pattern used as is

        Returns:
            The patterns to apply, in order

        Raises:
            ConfigError: No selector given, or the preset name is unknown

        A literal sequence is not validated; malformed patterns are the
        caller's problem.
        """
        if selector is None or (isinstance(selector, str) and not selector):
            raise ConfigError("No pattern given")

        if isinstance(selector, str):
            if selector not in self.presets:
                raise ConfigError(f"Unsupported pattern: {selector}")
            return list(self.presets[selector])

        return list(selector)

    def htmlPatterns_register(self) -> None:
        """Register the html preset"""
        self.register("html", [
            Pattern(
                re.compile(r"""<script.+src=['"]([^"']+)["']""", re.MULTILINE),
                "Update the HTML to reference our concat/min/revved script files",
            ),
            Pattern(
                re.compile(r"""<link[^>]+href=['"]([^"']+)["']""", re.MULTILINE),
                "Update the HTML with the new css filenames",
            ),
            Pattern(
                re.compile(r"""<img[^>]+src=['"]([^"']+)["']""", re.MULTILINE),
                "Update the HTML with the new img filenames",
            ),
            Pattern(
                re.compile(r"""data-main\s*=['"]([^"']+)['"]""", re.MULTILINE),
                "Update the HTML with data-main tags",
                filter_in=dataMain_filterIn,
                filter_out=dataMain_filterOut,
            ),
            Pattern(
                re.compile(r"""data-(?!main).[^=]+=['"]([^'"]+)['"]""", re.MULTILINE),
                "Update the HTML with data-* tags",
            ),
            Pattern(
                re.compile(r"""url\(\s*['"]([^"']+)["']\s*\)""", re.MULTILINE),
                "Update the HTML with background imgs, case there is some inline style",
            ),
            Pattern(
                re.compile(r"""<a[^>]+href=['"]([^"']+)["']""", re.MULTILINE),
                "Update the HTML with anchors images",
            ),
            Pattern(
                re.compile(r"""<input[^>]+src=['"]([^"']+)["']""", re.MULTILINE),
                "Update the HTML with reference in input",
            ),
        ])

    def cssPatterns_register(self) -> None:
        """Register the css preset"""
        self.register("css", [
            Pattern(
                re.compile(r"""(?:src=|url\(\s*)['"]?([^'"\)]+)['"]?\s*\)?""", re.MULTILINE),
                "Update the CSS to reference our revved images",
            ),
        ])


# Built-in presets, shared read-only
catalog = PatternCatalog(frozen=True)
