"""
Document and block models

Type-safe structures for the text handed to the Processor: the document
content, the concatenation blocks found in it, and the input union accepted
by Processor.process().
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


@dataclass
class Block:
    """
    A concatenation block found between build:/endbuild markers

    Attributes:
        type: Asset type named by the directive ("css", "js", ...)
        dest: Path of the bundled output file the block collapses to
        raw: Original source lines of the block, markers included
        indent: Leading whitespace of the build: line
        src: Asset paths referenced inside the block
        search_path: Alternate search directories given as build:type(dir)
        conditional_start: IE conditional comment opening the block, if any
        conditional_end: IE conditional comment closing the block, if any
        media: media attribute of the first stylesheet carrying one
        defer: Scripts in the block are loaded with the defer attribute
        start_from_root: dest was written relative to the site root ("/...")

    Example:
        For the source
            <!-- build:css style.min.css -->
            <link rel="stylesheet" href="a.css" media="print">
            <!-- endbuild -->
        Block(type="css", dest="style.min.css", media="print",
              raw=[<the three lines>], src=["a.css"], ...)
    """
    type: str
    dest: str
    raw: List[str] = field(default_factory=list)
    indent: str = ""
    src: List[str] = field(default_factory=list)
    search_path: List[str] = field(default_factory=list)
    conditional_start: Optional[str] = None
    conditional_end: Optional[str] = None
    media: Optional[str] = None
    defer: bool = False
    start_from_root: bool = False


@dataclass
class Document:
    """
    A text document ready for processing

    Attributes:
        content: Full document text, original line terminators preserved
        blocks: Concatenation blocks, in source order
        search_path: Directories the Finder consults when resolving references
        path: File the document was loaded from, when there is one
    """
    content: str
    blocks: List[Block] = field(default_factory=list)
    search_path: List[str] = field(default_factory=list)
    path: Optional[Path] = None


@dataclass(frozen=True)
class PathInput:
    """Processor input naming a file to load"""
    path: Path


@dataclass(frozen=True)
class DocumentInput:
    """Processor input carrying an already-built Document"""
    document: Document


ProcessInput = Union[PathInput, DocumentInput]
