"""
Document loader for build-block annotated sources

Reads a document from disk and extracts the concatenation blocks written as

    <!-- build:<type>(<alternate search path>) <dest> -->
    ... asset tags ...
    <!-- endbuild -->

The parser works line by line:
1. A build: line opens a block and records its type, dest and indent
2. Lines inside the block are scanned for asset references, media and defer
   attributes, and IE conditional comments
3. The endbuild line closes the block
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from ..models.document import Block, Document
from .errors import BlockParseError
from .log import LOG


BUILD_RE = re.compile(r"<!--\s*build:(\w+)(?:\(([^)]+)\))?\s*(\S+)?\s*-->")
ENDBUILD_RE = re.compile(r"<!--\s*endbuild\s*-->")
CONDITIONAL_START_RE = re.compile(r"<!--\[if.*\]>(?:<!-->)?(?: -->)?")
CONDITIONAL_END_RE = re.compile(r"(?:<!--\s?)?<!\[endif\]-->")
ASSET_RE = re.compile(r"""(href|src)=["']([^'"]+)["']""")
MEDIA_RE = re.compile(r"""media=['"]([^'"]+)['"]""")
DEFER_RE = re.compile(r" defer")


def blocks_extract(content: str) -> List[Block]:
    """
    Extract build blocks from document text

    Args:
        content: Document text (LF or CRLF line endings)

    Returns:
        Blocks in source order. Block.raw holds the lines without their
        terminators, build:/endbuild lines included.

    Raises:
        BlockParseError: build: without dest, nested or unterminated block,
                         or deferred and plain scripts mixed in one block
    """
    blocks: List[Block] = []
    current: Optional[Block] = None
    current_line = 0
    deferred: Optional[bool] = None

    lines = content.replace("\r\n", "\n").split("\n")
    for line_number, line in enumerate(lines, start=1):
        build = BUILD_RE.search(line)

        if build:
            if current is not None:
                raise BlockParseError(f"Nested build block inside '{current.dest}'", line_number)
            dest = build.group(3)
            if not dest:
                raise BlockParseError(f"build:{build.group(1)} has no destination", line_number)

            current = Block(
                type=build.group(1),
                dest=dest,
                indent=re.match(r"\s*", line).group(0),
                search_path=[build.group(2)] if build.group(2) else [],
                start_from_root=dest.startswith("/"),
            )
            current_line = line_number
            deferred = None
            LOG(f"Found build:{current.type} block for {current.dest} at line {line_number}", level=3)

        if current is None:
            continue

        conditional_start = CONDITIONAL_START_RE.search(line)
        if conditional_start:
            current.conditional_start = conditional_start.group(0)
        conditional_end = CONDITIONAL_END_RE.search(line)
        if conditional_end:
            current.conditional_end = conditional_end.group(0)

        if ENDBUILD_RE.search(line):
            current.raw.append(line)
            current.defer = bool(deferred)
            blocks.append(current)
            current = None
            continue

        asset = ASSET_RE.search(line)
        if asset:
            current.src.append(asset.group(2))

            media = MEDIA_RE.search(line)
            if media and not current.media:
                current.media = media.group(1)

            is_deferred = bool(DEFER_RE.search(line))
            if deferred is not None and deferred != is_deferred:
                raise BlockParseError(
                    "You are not supposed to mix deferred and non-deferred scripts in one block",
                    line_number,
                )
            deferred = is_deferred

        current.raw.append(line)

    if current is not None:
        raise BlockParseError(f"Block for '{current.dest}' has no endbuild", current_line)

    return blocks


def document_load(path: Union[str, Path], encoding: str = "utf-8") -> Document:
    """
    Read a document and extract its blocks

    Line terminators are kept as they are in the file, so CRLF documents
    round-trip unchanged.

    Args:
        path: Document to read
        encoding: Text encoding of the document

    Returns:
        Document whose search path is the directory containing the file
    """
    path = Path(path)
    with open(path, "r", encoding=encoding, newline="") as handle:
        content = handle.read()
    LOG(f"Read {len(content)} characters from {path.name}", level=2)

    blocks = blocks_extract(content)
    LOG(f"Found {len(blocks)} blocks in {path.name}", level=2)

    return Document(content=content, blocks=blocks, search_path=[str(path.parent)], path=path)
