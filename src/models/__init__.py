"""
Models package for mexpand

Contains data structures and type definitions for the expansion pipeline.
"""

from .state import ProgramState, pipeline
from .directives import DirectiveSpec, DirectiveCategory
from .scanner import (
    ScanState,
    HaltReason,
    DelimitedText,
    EOF,
    END_OF_INPUT,
    LEFT_DELIM,
    RIGHT_DELIM,
    COMMENT_OPEN,
)
from .pathmatch import IOPair

__all__ = [
    "ProgramState",
    "pipeline",
    "DirectiveSpec",
    "DirectiveCategory",
    "ScanState",
    "HaltReason",
    "DelimitedText",
    "EOF",
    "END_OF_INPUT",
    "LEFT_DELIM",
    "RIGHT_DELIM",
    "COMMENT_OPEN",
    "IOPair",
]
