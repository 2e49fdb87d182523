"""
Models package for assetrev

Contains data structures and type definitions for the rewrite pipeline.
"""

from .state import ProgramState, pipeline
from .patterns import Pattern, identity
from .document import Block, Document, PathInput, DocumentInput, ProcessInput
from .finder import Finder

__all__ = [
    "ProgramState",
    "pipeline",
    "Pattern",
    "identity",
    "Block",
    "Document",
    "PathInput",
    "DocumentInput",
    "ProcessInput",
    "Finder",
]
