"""
Block replacement tests

Tests tag rendering, conditional wrapping, line terminators and the
missing-block policy.
"""

import pytest

from assetrev.lib.blocks import BlockReplacer
from assetrev.lib.errors import BlockNotFoundError
from assetrev.models.document import Block, Document


CSS_RAW = [
    "  <!-- build:css style.min.css -->",
    '  <link rel="stylesheet" href="css/a.css" media="print">',
    '  <link rel="stylesheet" href="css/b.css" media="print">',
    "  <!-- endbuild -->",
]

JS_RAW = [
    "  <!-- build:js app.min.js -->",
    '  <script src="js/a.js"></script>',
    '  <script src="js/b.js"></script>',
    "  <!-- endbuild -->",
]


def page(*sections: str, linefeed: str = "\n") -> str:
    """Join page sections into one document"""
    return linefeed.join(sections)


class TestTagRendering:
    """Test the rendered tag for each block kind"""

    def test_css_block_with_media(self):
        """css block becomes one stylesheet link carrying media"""
        block = Block(type="css", dest="style.min.css", raw=CSS_RAW, indent="  ", media="print")
        document = Document(content=page("<head>", *CSS_RAW, "</head>"), blocks=[block])

        result = BlockReplacer().replace(document)

        assert result == page(
            "<head>",
            '  <link rel="stylesheet" href="style.min.css" media="print"/>',
            "</head>",
        )

    def test_css_block_without_media(self):
        block = Block(type="css", dest="style.min.css")
        assert BlockReplacer.tag_render(block) == '<link rel="stylesheet" href="style.min.css"/>'

    def test_deferred_js_block(self):
        """Deferred block renders a deferred script"""
        block = Block(type="js", dest="app.min.js", raw=JS_RAW, indent="  ", defer=True)
        document = Document(content=page("<body>", *JS_RAW, "</body>"), blocks=[block])

        result = BlockReplacer().replace(document)

        assert '  <script defer src="app.min.js"></script>' in result
        assert "js/a.js" not in result

    def test_plain_js_block(self):
        block = Block(type="js", dest="app.min.js")
        assert BlockReplacer.tag_render(block) == '<script src="app.min.js"></script>'

    def test_unknown_type_has_no_tag(self):
        block = Block(type="html", dest="partial.html")
        assert BlockReplacer.tag_render(block) is None


class TestConditionalWrapping:
    """Test IE conditional comment wrapping"""

    def test_wrapped_css_block(self):
        """Conditional lines wrap the tag, indent reproduced on each line"""
        raw = [
            "    <!-- build:css style.min.css -->",
            "    <!--[if IE]>",
            '    <link rel="stylesheet" href="css/ie.css" media="print">',
            "    <![endif]-->",
            "    <!-- endbuild -->",
        ]
        block = Block(
            type="css",
            dest="style.min.css",
            raw=raw,
            indent="    ",
            media="print",
            conditional_start="<!--[if IE]>",
            conditional_end="<![endif]-->",
        )
        document = Document(content=page("<head>", *raw, "</head>"), blocks=[block])

        result = BlockReplacer().replace(document)

        assert result == page(
            "<head>",
            "    <!--[if IE]>",
            '    <link rel="stylesheet" href="style.min.css" media="print"/>',
            "    <![endif]-->",
            "</head>",
        )

    def test_wrapping_uses_document_linefeed(self):
        """CRLF documents get CRLF between the wrapper lines"""
        block = Block(
            type="js",
            dest="ie.min.js",
            indent="",
            conditional_start="<!--[if lt IE 9]>",
            conditional_end="<![endif]-->",
        )
        rendered = BlockReplacer().replacement_render(block, "\r\n")
        assert rendered == '<!--[if lt IE 9]>\r\n<script src="ie.min.js"></script>\r\n<![endif]-->'


class TestReplacementSemantics:
    """Test ordering, line terminators and missing blocks"""

    def test_no_blocks_leaves_content(self):
        content = "<p>Nothing to do</p>\n"
        assert BlockReplacer().replace(Document(content=content)) == content

    def test_crlf_document(self):
        """raw lines are joined with CRLF when the document uses it"""
        block = Block(type="js", dest="app.min.js", raw=JS_RAW, indent="  ")
        document = Document(content=page("<body>", *JS_RAW, "</body>", linefeed="\r\n"), blocks=[block])

        result = BlockReplacer().replace(document)

        assert result == '<body>\r\n  <script src="app.min.js"></script>\r\n</body>'

    def test_only_first_occurrence_replaced(self):
        """Identical block text elsewhere is left alone"""
        block = Block(type="js", dest="app.min.js", raw=JS_RAW, indent="  ")
        content = page(*JS_RAW, "<hr>", *JS_RAW)

        result = BlockReplacer().replace(Document(content=content, blocks=[block]))

        assert result.count('<script src="app.min.js"></script>') == 1
        assert result.endswith(page(*JS_RAW))

    def test_blocks_applied_in_order(self):
        """Each block is replaced on the output of the previous one"""
        css = Block(type="css", dest="style.min.css", raw=CSS_RAW, indent="  ")
        js = Block(type="js", dest="app.min.js", raw=JS_RAW, indent="  ")
        content = page("<head>", *CSS_RAW, "</head>", "<body>", *JS_RAW, "</body>")

        result = BlockReplacer().replace(Document(content=content, blocks=[css, js]))

        assert result == page(
            "<head>",
            '  <link rel="stylesheet" href="style.min.css"/>',
            "</head>",
            "<body>",
            '  <script src="app.min.js"></script>',
            "</body>",
        )

    def test_missing_block_is_skipped(self):
        """Block text not in the document is a silent no-op by default"""
        block = Block(type="js", dest="app.min.js", raw=JS_RAW, indent="  ")
        content = "<body></body>"
        assert BlockReplacer().replace(Document(content=content, blocks=[block])) == content

    def test_missing_block_strict(self):
        """Strict mode reports the missing block"""
        block = Block(type="js", dest="app.min.js", raw=JS_RAW, indent="  ")
        with pytest.raises(BlockNotFoundError, match="app.min.js"):
            BlockReplacer(strict=True).replace(Document(content="<body></body>", blocks=[block]))

    def test_untagged_block_left_in_place(self):
        """A block type without a tag keeps its original text"""
        raw = ["<!-- build:remove -->", "<p>debug</p>", "<!-- endbuild -->"]
        block = Block(type="remove", dest="nothing", raw=raw)
        content = page("<body>", *raw, "</body>")

        assert BlockReplacer(strict=True).replace(Document(content=content, blocks=[block])) == content
