"""
Function and constant tables for term parsing.

A Context lists the built-in function names by arity class and the named
irrational constants. The parser uses it to tell function calls from
variables and the token splitter uses it to keep known names intact.

Contexts are frozen: the default one is shared by every parser in the process
and may be read concurrently.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from .tokenizer import is_identifier

INFINITY = "inf"

TABLES = ("nullary", "unary", "binary", "ternary", "quaternary", "irrationals")


class Context(BaseModel):
    """
    Parsing context defining the known function names and constants.

    Attributes:
        name: Context name (for diagnostics)
        nullary: Functions taking no arguments (fct0), e.g. zeros<2,3>()
        unary: Functions taking one argument (fct1), callable without parentheses
        binary: Functions taking two arguments (fct2)
        ternary: Functions taking three arguments (fct3), currently unused
        quaternary: Functions taking four arguments (fct4)
        irrationals: Named irrational constants, e.g. pi
    """

    model_config = ConfigDict(frozen=True)

    name: str = "Default"
    nullary: frozenset[str] = frozenset()
    unary: frozenset[str] = frozenset()
    binary: frozenset[str] = frozenset()
    ternary: frozenset[str] = frozenset()
    quaternary: frozenset[str] = frozenset()
    irrationals: frozenset[str] = frozenset()

    @field_validator(*TABLES)
    @classmethod
    def _check_names(cls, names: frozenset[str]) -> frozenset[str]:
        for name in names:
            if not is_identifier(name):
                raise ValueError(f"'{name}' is not a valid identifier")
        return names

    @classmethod
    def default(cls) -> "Context":
        """The standard function tables shared by all exercises."""
        return DEFAULT_CONTEXT

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Context":
        """
        Load a context from a YAML file.

        Keys that are missing in the file keep an empty table, e.g.

            name: Linear Algebra
            nullary: [eye, zeros]
            unary: [det, transpose]
            irrationals: [pi]

        Args:
            path: Path to the YAML file

        Returns:
            Context instance

        Raises:
            OSError: If the file cannot be read
            yaml.YAMLError: If the file is not valid YAML
            pydantic.ValidationError: If a table is malformed
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def extend(self, **tables: Any) -> "Context":
        """
        Return a copy with additional names merged into the given tables.

        Example: DEFAULT_CONTEXT.extend(unary=["log"])

        Raises:
            ValueError: If a keyword is not a table name or "name"
        """
        update: dict[str, Any] = {}
        for key, names in tables.items():
            if key == "name":
                update[key] = names
            elif key not in TABLES:
                raise ValueError(f"unknown table '{key}'")
            else:
                update[key] = getattr(self, key) | frozenset(names)
        return self.model_validate({**self.model_dump(), **update})

    def arities(self, name: str) -> set[int]:
        """Argument counts accepted by a function (empty if not a function)."""
        result: set[int] = set()
        for arity, table in enumerate(
            (self.nullary, self.unary, self.binary, self.ternary, self.quaternary)
        ):
            if name in table:
                result.add(arity)
        return result

    def is_function(self, name: str) -> bool:
        return bool(self.arities(name))

    def is_irrational(self, name: str) -> bool:
        return name in self.irrationals

    def is_builtin(self, name: str) -> bool:
        """Built-in constant names, which are never split into letters."""
        return name == INFINITY or name in self.irrationals


DEFAULT_CONTEXT = Context(
    name="Default",
    nullary=frozenset({"eye", "ones", "zeros"}),
    unary=frozenset(
        {
            "abs",
            "arg",
            "ceil",
            "cols",
            "conj",
            "cos",
            "det",
            "exp",
            "fac",
            "floor",
            "imag",
            "len",
            "ln",
            "max",
            "min",
            "norm",
            "opt",
            "rand",
            "real",
            "round",
            "rows",
            "shuffle",
            "sin",
            "sqrt",
            "tan",
            "term",
            "transpose",
            "triu",
            "is_invertible",
            "is_symmetric",
            "is_zero",
        }
    ),
    binary=frozenset(
        {"binomial", "col", "complex", "cross", "diff", "dot", "rand", "randZ", "row"}
    ),
    ternary=frozenset(),
    quaternary=frozenset({"int"}),
    irrationals=frozenset({"pi", "e"}),
)
