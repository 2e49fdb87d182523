"""
assetrev - Revved asset reference rewriter

Rewrites script, stylesheet, image and anchor references in HTML and CSS so
they point at the fingerprinted files produced by an earlier build step.
"""

__version__ = "1.0.0"

from .patterns import PatternCatalog, catalog
from .blocks import BlockReplacer
from .rewriter import ReferenceRewriter
from .processor import Processor
from .loader import blocks_extract, document_load
from .finder import ManifestFinder, manifest_load
from .errors import (
    AssetRevError,
    ConfigError,
    BlockNotFoundError,
    BlockParseError,
    ManifestError,
    AssetNotFoundError,
)
from .log import LOG, state_connectToLogger, logSink_make

__all__ = [
    "PatternCatalog",
    "catalog",
    "BlockReplacer",
    "ReferenceRewriter",
    "Processor",
    "blocks_extract",
    "document_load",
    "ManifestFinder",
    "manifest_load",
    "AssetRevError",
    "ConfigError",
    "BlockNotFoundError",
    "BlockParseError",
    "ManifestError",
    "AssetNotFoundError",
    "LOG",
    "state_connectToLogger",
    "logSink_make",
    "__version__",
]
