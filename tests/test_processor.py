"""
Processor tests

Tests construction errors, input dispatch, search path override and the
full block-then-reference pipeline.
"""

import tempfile
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

from assetrev.lib.processor import Processor
from assetrev.lib.errors import BlockNotFoundError, ConfigError
from assetrev.models.document import Block, Document, DocumentInput, PathInput
from assetrev.models.patterns import Pattern


class DictFinder:
    """Finder backed by a dict; unknown paths resolve to themselves"""

    def __init__(self, mapping: Dict[str, str]):
        self.mapping = mapping
        self.search_paths: List[List[str]] = []

    def find(self, path: str, search_path: Sequence[str]) -> str:
        self.search_paths.append(list(search_path))
        return self.mapping.get(path, path)


PAGE = """<html>
<head>
  <!-- build:css css/site.min.css -->
  <link rel="stylesheet" href="css/a.css">
  <link rel="stylesheet" href="css/b.css">
  <!-- endbuild -->
</head>
<body>
  <img src="img/logo.png?size=2">
  <!-- build:js js/app.min.js -->
  <script src="js/a.js"></script>
  <script src="js/b.js"></script>
  <!-- endbuild -->
</body>
</html>
"""

REVVED = {
    "css/site.min.css": "css/site.min.8a7b.css",
    "js/app.min.js": "js/app.min.6c5d.js",
    "img/logo.png": "img/logo.4e3f.png",
}

EXPECTED = """<html>
<head>
  <link rel="stylesheet" href="css/site.min.8a7b.css"/>
</head>
<body>
  <img src="img/logo.4e3f.png?size=2">
  <script src="js/app.min.6c5d.js"></script>
</body>
</html>
"""


class TestConstruction:
    """Test construction-time errors"""

    def test_missing_patterns(self):
        with pytest.raises(ConfigError, match="No pattern given"):
            Processor(None, DictFinder({}))

    def test_unsupported_preset(self):
        with pytest.raises(ConfigError, match="Unsupported pattern"):
            Processor("markdown", DictFinder({}))

    def test_missing_finder(self):
        with pytest.raises(ConfigError, match="Missing parameter: finder"):
            Processor("html", None)

    def test_literal_patterns(self):
        patterns = [Pattern(r'src="([^"]+)"', "src")]
        assert Processor(patterns, DictFinder({})).patterns == patterns


class TestProcess:
    """Test processing documents"""

    def test_unchanged_document(self):
        """No blocks and no references: content comes back as is"""
        content = "<html><body><p>Hello</p></body></html>"
        result = Processor("html", DictFinder(REVVED)).process(Document(content=content))
        assert result == content

    def test_blocks_then_references(self):
        """Blocks collapse first, then their dest gets revved"""
        from assetrev.lib.loader import blocks_extract

        document = Document(content=PAGE, blocks=blocks_extract(PAGE), search_path=["site"])
        result = Processor("html", DictFinder(REVVED)).process(document)
        assert result == EXPECTED

    def test_path_input(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "index.html"
            path.write_text(PAGE, encoding="utf-8")

            finder = DictFinder(REVVED)
            processor = Processor("html", finder)

            assert processor.process(str(path)) == EXPECTED
            assert processor.process(path) == EXPECTED
            assert processor.process(PathInput(path)) == EXPECTED
            assert finder.search_paths[0] == [tmpdir]

    def test_crlf_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "index.html"
            path.write_bytes(PAGE.replace("\n", "\r\n").encode("utf-8"))

            result = Processor("html", DictFinder(REVVED)).process(path)

            assert result == EXPECTED.replace("\n", "\r\n")

    def test_document_input(self):
        document = Document(content='<img src="img/logo.png">')
        result = Processor("html", DictFinder(REVVED)).process(DocumentInput(document))
        assert result == '<img src="img/logo.4e3f.png">'

    def test_search_path_override(self):
        """A non-empty search path replaces the document's, without mutating it"""
        finder = DictFinder(REVVED)
        document = Document(content='<img src="img/logo.png">', search_path=["site"])

        Processor("html", finder).process(document, ["dist", "vendor"])

        assert finder.search_paths == [["dist", "vendor"]]
        assert document.search_path == ["site"]

    def test_single_directory_override(self):
        """A lone directory string is one search path entry, not a list of characters"""
        finder = DictFinder(REVVED)
        document = Document(content='<img src="img/logo.png">', search_path=["site"])

        Processor("html", finder).process(document, "dist")
        Processor("html", finder).process(document, Path("vendor"))

        assert finder.search_paths == [["dist"], ["vendor"]]

    def test_empty_override_keeps_document_path(self):
        finder = DictFinder(REVVED)
        document = Document(content='<img src="img/logo.png">', search_path=["site"])

        Processor("html", finder).process(document, [])

        assert finder.search_paths == [["site"]]

    def test_unsupported_input(self):
        with pytest.raises(TypeError):
            Processor("html", DictFinder({})).process(42)

    def test_strict_missing_block(self):
        block = Block(type="js", dest="app.js", raw=["<!-- build:js app.js -->", "<!-- endbuild -->"])
        document = Document(content="<body></body>", blocks=[block])

        assert Processor("html", DictFinder({})).process(document) == "<body></body>"
        with pytest.raises(BlockNotFoundError):
            Processor("html", DictFinder({}), strict=True).process(document)

    def test_finder_errors_propagate(self):
        class FailingFinder:
            def find(self, path, search_path):
                raise LookupError(path)

        with pytest.raises(LookupError, match="img/logo.png"):
            Processor("html", FailingFinder()).process(Document(content='<img src="img/logo.png">'))

    def test_log_sink(self):
        messages: List[str] = []
        Processor("css", DictFinder(REVVED), log=messages.append).process(
            Document(content="a { background: url(img/logo.png) }")
        )
        assert messages[0] == "Update the CSS to reference our revved images"
        assert "url(img/logo.png) changed to url(img/logo.4e3f.png)" in messages[1]
