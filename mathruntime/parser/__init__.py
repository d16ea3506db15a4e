"""
Term Parser Package

This package parses math expressions typed by students and course authors
into terms. It includes tokenization, token post-processing (implicit
multiplication splitting, randomized operator alternatives) and a recursive
descent parser that builds terms through an injectable builder.
"""

from .context import DEFAULT_CONTEXT, Context
from .parser import ErrorTag, ParseError, Parser, parse
from .term import (
    ConstBoolean,
    ConstComplex,
    ConstInfinity,
    ConstInt,
    ConstIrrational,
    ConstReal,
    DefaultTermBuilder,
    Operator,
    Term,
    TermBuilder,
    Variable,
)
from .tokenizer import END, Tokenizer

__all__ = [
    "DEFAULT_CONTEXT",
    "Context",
    "ErrorTag",
    "ParseError",
    "Parser",
    "parse",
    "ConstBoolean",
    "ConstComplex",
    "ConstInfinity",
    "ConstInt",
    "ConstIrrational",
    "ConstReal",
    "DefaultTermBuilder",
    "Operator",
    "Term",
    "TermBuilder",
    "Variable",
    "END",
    "Tokenizer",
]
