"""
Block replacement

Collapses each concatenation block of a document into the single tag that
references the block's bundled output file.
"""

from typing import Optional

from ..models.document import Block, Document
from .errors import BlockNotFoundError
from .log import LOG


class BlockReplacer:
    """
    Replaces literal block text with a rendered tag

    Blocks are handled in document order, each one on the output of the
    previous replacement. Only the first occurrence of a block's text is
    replaced.
    """

    def __init__(self, strict: bool = False) -> None:
        """
        Args:
            strict: Raise BlockNotFoundError when a block's text is missing
                    from the document, instead of skipping the block
        """
        self.strict = strict

    def replace(self, document: Document) -> str:
        """
        Replace every block of a document

        Args:
            document: Document whose blocks are to be collapsed

        Returns:
            The document content with blocks replaced
        """
        result = document.content

        for block in document.blocks:
            linefeed = self.linefeed_detect(result)
            search = linefeed.join(block.raw)
            replacement = self.replacement_render(block, linefeed)

            if replacement is None:
                LOG(f"Warning: No tag for block of type '{block.type}' ({block.dest}), left as is", level=1)
                continue

            if search not in result:
                if self.strict:
                    raise BlockNotFoundError(block.dest, search)
                LOG(f"Block for {block.dest} not found, skipped", level=2)
                continue

            result = result.replace(search, replacement, 1)
            LOG(f"Block for {block.dest} replaced", level=2)

        return result

    @staticmethod
    def linefeed_detect(content: str) -> str:
        """CRLF if the content uses it anywhere, LF otherwise"""
        return "\r\n" if "\r\n" in content else "\n"

    @staticmethod
    def tag_render(block: Block) -> Optional[str]:
        """
        Render the tag referencing a block's dest

        Returns:
            The tag, or None for a block type that has no tag
        """
        if block.type == "css":
            media = f' media="{block.media}"' if block.media else ""
            return f'<link rel="stylesheet" href="{block.dest}"{media}/>'
        if block.defer:
            return f'<script defer src="{block.dest}"></script>'
        if block.type == "js":
            return f'<script src="{block.dest}"></script>'
        return None

    def replacement_render(self, block: Block, linefeed: str = "\n") -> Optional[str]:
        """
        Render the full replacement text for a block

        The tag is indented like the block's build: line and, when the block
        sat inside an IE conditional comment, wrapped in it again:

            <indent><!--[if lt IE 9]>
            <indent><script src="dest"></script>
            <indent><![endif]-->
        """
        tag = self.tag_render(block)
        if tag is None:
            return None

        start = f"{block.conditional_start}{linefeed}{block.indent}" if block.conditional_start else ""
        end = f"{linefeed}{block.indent}{block.conditional_end}" if block.conditional_end else ""
        return f"{block.indent}{start}{tag}{end}"
