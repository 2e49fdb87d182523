"""
Processor for revved asset references

Runs a document through block replacement and then reference rewriting:

    Document --BlockReplacer--> text --ReferenceRewriter--> final text

The Processor owns nothing but a resolved pattern list; the finder belongs to
the caller and is only ever read through find().
"""

import dataclasses
import os
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..config import appsettings
from ..models.document import Document, DocumentInput, PathInput, ProcessInput
from ..models.finder import Finder
from .blocks import BlockReplacer
from .errors import ConfigError
from .loader import document_load
from .log import LOG
from .patterns import PatternCatalog, PatternSelector, catalog as default_catalog
from .rewriter import ReferenceRewriter


ProcessSource = Union[ProcessInput, Document, str, "os.PathLike[str]"]


class Processor:
    """
    Rewrites a document so its asset references point at revved files

    Responsibilities:
    - Resolve the pattern selector once, at construction
    - Turn the process() input into a Document
    - Collapse blocks, then rewrite references
    """

    def __init__(
        self,
        patterns: PatternSelector,
        finder: Finder,
        log: Optional[Callable[[str], None]] = None,
        strict: Optional[bool] = None,
        catalog: Optional[PatternCatalog] = None,
    ) -> None:
        """
        Initialize processor

        Args:
            patterns: Preset name ("html", "css") or a sequence of Pattern
            finder: Resolves asset paths to their revved counterparts
            log: Single-argument sink for progress messages (no-op default)
            strict: Raise on blocks missing from the document; defaults to
                    appsettings.strict_blocks
            catalog: Catalogue preset names are looked up in

        Raises:
            ConfigError: No patterns, unknown preset, or no finder
        """
        self.catalog = catalog or default_catalog
        self.patterns = self.catalog.resolve(patterns)

        if finder is None:
            raise ConfigError("Missing parameter: finder")
        self.finder = finder

        self.log = log
        self.strict = appsettings.strict_blocks if strict is None else strict
        self.block_replacer = BlockReplacer(strict=self.strict)
        self.reference_rewriter = ReferenceRewriter(finder, log)

    @staticmethod
    def input_coerce(source: ProcessSource) -> ProcessInput:
        """
        Wrap a bare path or Document into the ProcessInput union

        Raises:
            TypeError: source is neither a path nor a Document
        """
        if isinstance(source, (PathInput, DocumentInput)):
            return source
        if isinstance(source, Document):
            return DocumentInput(source)
        if isinstance(source, (str, os.PathLike)):
            return PathInput(Path(source))
        raise TypeError(f"Cannot process {type(source).__name__}: expected a path or a Document")

    def document_get(self, source: ProcessSource) -> Document:
        """Load or unwrap the Document behind a process() input"""
        process_input = self.input_coerce(source)
        if isinstance(process_input, PathInput):
            return document_load(process_input.path, encoding=appsettings.input_encoding)
        return process_input.document

    def process(
        self,
        source: ProcessSource,
        asset_search_path: Union[Sequence[str], str, "os.PathLike[str]", None] = None,
    ) -> str:
        """
        Rewrite one document

        Args:
            source: Path of the document, or a Document
            asset_search_path: When non-empty, replaces the document's own
                               search path. A single directory may be
                               given as a str or path

        Returns:
            The rewritten content
        """
        document = self.document_get(source)
        LOG(f"Processing {document.path or 'document'}", level=2)

        if isinstance(asset_search_path, (str, os.PathLike)):
            asset_search_path = [os.fspath(asset_search_path)]
        if asset_search_path:
            document = dataclasses.replace(document, search_path=list(asset_search_path))

        content = self.block_replacer.replace(document)
        return self.reference_rewriter.rewrite(content, self.patterns, document.search_path)
