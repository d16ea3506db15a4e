"""
Term nodes produced by the parser.

The parser only talks to a TermBuilder. Any object implementing the protocol
(for instance the evaluator's own term factory) can be passed in; the parser
never inspects the terms it creates. DefaultTermBuilder builds the lightweight
immutable nodes below, which compare structurally.

Operator names used by the grammar:
    ||  &&  ==  !=  <  <=  >  >=  +  -  *  /  ^     binary/n-ary operators
    .-  !                                            unary negation, logical not
    abs index1 index2 vec matrix set                 structural operators
    <function name>                                  built-in function calls
"""

from dataclasses import dataclass
from typing import Any, Protocol


class TermBuilder(Protocol):
    """
    Construction interface for the parser's output.

    Implementations can build evaluator terms, sympy expressions, etc.
    """

    def create_op(self, op: str, args: list[Any], dims: list[Any]) -> Any:
        ...

    def create_var(self, name: str) -> Any:
        ...

    def create_const_boolean(self, value: bool) -> Any:
        ...

    def create_const_int(self, value: int) -> Any:
        ...

    def create_const_real(self, value: float) -> Any:
        ...

    def create_const_complex(self, real: int | float, imag: int | float) -> Any:
        ...

    def create_const_infinity(self) -> Any:
        ...

    def create_const_irrational(self, name: str) -> Any:
        ...


class Term:
    """Base class for the default term nodes."""


# Leaf nodes


@dataclass(frozen=True)
class Variable(Term):
    """
    A variable.

    Examples: x, y, xy (when identifier splitting is disabled)
    """

    name: str


@dataclass(frozen=True)
class ConstBoolean(Term):
    value: bool


@dataclass(frozen=True)
class ConstInt(Term):
    value: int


@dataclass(frozen=True)
class ConstReal(Term):
    value: float


@dataclass(frozen=True)
class ConstComplex(Term):
    """
    A complex constant.

    Examples: 2i -> ConstComplex(0, 2), i -> ConstComplex(0, 1)
    """

    real: int | float
    imag: int | float


@dataclass(frozen=True)
class ConstInfinity(Term):
    pass


@dataclass(frozen=True)
class ConstIrrational(Term):
    """A named irrational constant: pi, e."""

    name: str


# Composite nodes


@dataclass(frozen=True)
class Operator(Term):
    """
    An operator or function application.

    Examples:
    - a-b+c -> Operator("+", (a, Operator(".-", (b,)), c))
    - zeros<2,3>() -> Operator("zeros", (), (2, 3))
    - [1,2] -> Operator("vec", (1, 2))

    Attributes:
        op: Operator or function name
        args: Operand terms
        dims: Dimension terms given in angle brackets before a function call
    """

    op: str
    args: tuple[Term, ...] = ()
    dims: tuple[Term, ...] = ()


class DefaultTermBuilder:
    """Builds the default immutable term nodes."""

    def create_op(self, op: str, args: list[Term], dims: list[Term]) -> Operator:
        return Operator(op, tuple(args), tuple(dims))

    def create_var(self, name: str) -> Variable:
        return Variable(name)

    def create_const_boolean(self, value: bool) -> ConstBoolean:
        return ConstBoolean(value)

    def create_const_int(self, value: int) -> ConstInt:
        return ConstInt(value)

    def create_const_real(self, value: float) -> ConstReal:
        return ConstReal(value)

    def create_const_complex(
        self, real: int | float, imag: int | float
    ) -> ConstComplex:
        return ConstComplex(real, imag)

    def create_const_infinity(self) -> ConstInfinity:
        return ConstInfinity()

    def create_const_irrational(self, name: str) -> ConstIrrational:
        return ConstIrrational(name)
