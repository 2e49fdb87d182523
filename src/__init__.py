"""
assetrev - Revved asset reference rewriter

Post-processing stage of an asset pipeline: collapses build blocks into
single tags and points asset references at content-addressed files.
"""

__version__ = "1.0.0"

from .lib import Processor, PatternCatalog, ManifestFinder, LOG, state_connectToLogger
from .models import Pattern, Block, Document

__all__ = [
    "Processor",
    "PatternCatalog",
    "ManifestFinder",
    "Pattern",
    "Block",
    "Document",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
