"""
mathruntime - term parsing for math exercises.

    from mathruntime import parse

    parse("3x + sin y")
"""

from .parser import Context, ErrorTag, ParseError, Parser, parse

__all__ = ["Context", "ErrorTag", "ParseError", "Parser", "parse"]

__version__ = "0.1.0"
