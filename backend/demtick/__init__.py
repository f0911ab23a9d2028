"""Tick counter for Source engine (HL2DEMO) demo files."""

from demtick.exceptions import (
    DemoParserCorruptedFileException,
    DemoParserException,
    InvalidSignonLength,
    UnexpectedEndOfData,
    UnrecognizedTag,
)
from demtick.parser import DemoParser

__all__ = [
    "DemoParser",
    "DemoParserException",
    "DemoParserCorruptedFileException",
    "InvalidSignonLength",
    "UnexpectedEndOfData",
    "UnrecognizedTag",
]
