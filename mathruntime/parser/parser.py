"""
Recursive descent parser for student and author math input.

Each precedence level of the grammar is one method, from lowest to highest
binding:

    term        = lor ;
    lor         = land [ "||" land ] ;
    land        = equal [ "&&" equal ] ;
    equal       = relational [ ("=="|"!=") relational ] ;
    relational  = add [ ("<"|"<="|">"|">=") add ] ;
    add         = mul { ("+"|"-") mul } ;
    mul         = pow { ("*"|"/"|<implicit "*">) pow } ;
    pow         = unary [ "^" unary ] ;
    unary       = "-" mul | "!" infix | infix [ postfix ] ;
    infix       = "true" | "false" | "inf" | IMAG | INT | REAL | IRRATIONAL
                | fct1 unary
                | fct [ "<" unary { "," unary } ">" ] "(" [ term { "," term } ] ")"
                | ID | "(" term ")" | "|" term "|" | matrixOrVector | set ;
    postfix     = "[" term "]" | "[" term "," term "]" ;
    vector      = "[" [ term { "," term } ] "]" ;
    matrixOrVector = vector | "[" [ vector { "," vector } ] "]" ;
    set         = "{" term { "," term } "}" ;

Comparison and logical operators do not chain: "a==b==c" is rejected.
The parser uses exactly one token of lookahead and never backtracks.
"""

import logging
import random
from enum import Enum
from typing import Any, Callable

from ..core.config import Settings, get_settings
from .context import DEFAULT_CONTEXT, INFINITY, Context
from .postprocess import resolve_random_alternatives, split_ambiguous_tokens
from .term import DefaultTermBuilder, TermBuilder
from .tokenizer import END, Tokenizer, is_identifier, is_imaginary, is_integer, is_real

logger = logging.getLogger(__name__)


class ErrorTag(str, Enum):
    """Machine-readable reasons for a failed parse."""

    EXPECTED_RPAREN = 'expected ")"'
    EXPECTED_RBRACKET = 'expected "]"'
    EXPECTED_LBRACKET = 'expected "["'
    EXPECTED_RBRACE = 'expected "}"'
    EXPECTED_RANGLE = 'expected ">"'
    EXPECTED_PIPE = 'expected "|"'
    EXPECTED_CALL = 'expected "(" or a unary function'
    WRONG_ARGUMENT_COUNT = "wrong number of arguments"
    UNEXPECTED_TOKEN = "unexpected token"
    UNEXPECTED_END = "unexpected end of input"
    TRAILING_TOKENS = "unexpected trailing tokens"


class ParseError(Exception):
    """
    Exception raised when the input does not match the grammar.

    Attributes:
        tag: Reason for the failure
        token: Lookahead token at the point of failure
        position: Index of that token in the processed token stream
        detail: Extra information, e.g. the function name on arity mismatch
    """

    def __init__(
        self, tag: ErrorTag, token: str, position: int, detail: str | None = None
    ):
        self.tag = tag
        self.token = token
        self.position = position
        self.detail = detail
        message = f"{tag.value} at token {position}: '{token}'"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class Parser:
    """
    Parses math expressions into terms.

    The parser owns the token stream and cursor of the most recent call to
    parse(); a Parser instance must not be shared between threads.

    Example:
        >>> Parser().parse("3x")
        Operator(op='*', args=(ConstInt(value=3), Variable(name='x')), dims=())
    """

    def __init__(
        self,
        context: Context | None = None,
        builder: TermBuilder | None = None,
        rng: random.Random | None = None,
        split_identifiers: bool | None = None,
    ):
        """
        Initialize parser.

        Args:
            context: Function and constant tables (defaults to DEFAULT_CONTEXT)
            builder: Term factory (defaults to DefaultTermBuilder)
            rng: Random source for "{+|-}" alternatives
            split_identifiers: Default for parse() when no flag is given
                (defaults to Settings.SPLIT_IDENTIFIERS)
        """
        self.context = context if context is not None else DEFAULT_CONTEXT
        self.builder = builder if builder is not None else DefaultTermBuilder()
        self.rng = rng
        if split_identifiers is None:
            split_identifiers = get_settings().SPLIT_IDENTIFIERS
        self.split_identifiers = split_identifiers
        self._tokens: list[str] = []
        self._pos = 0
        self._token = END

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, builder: TermBuilder | None = None
    ) -> "Parser":
        """
        Build a parser configured from Settings.

        Uses SPLIT_IDENTIFIERS, RANDOM_SEED and CONTEXT_FILE.
        """
        settings = settings if settings is not None else get_settings()
        context = (
            Context.from_yaml(settings.CONTEXT_FILE) if settings.CONTEXT_FILE else None
        )
        rng = (
            random.Random(settings.RANDOM_SEED)
            if settings.RANDOM_SEED is not None
            else None
        )
        return cls(
            context=context,
            builder=builder,
            rng=rng,
            split_identifiers=settings.SPLIT_IDENTIFIERS,
        )

    @property
    def tokens(self) -> list[str]:
        """Processed tokens of the last parse() call, including END."""
        return list(self._tokens)

    def get_tokens(self) -> list[str]:
        return self.tokens

    def tokenize(self, source: str, split_identifiers: bool | None = None) -> list[str]:
        """
        Scan and post-process an expression without parsing it.

        Args:
            source: The expression
            split_identifiers: Split "xy" and "3x" (defaults to the parser setting)

        Returns:
            Token list terminated by END
        """
        if split_identifiers is None:
            split_identifiers = self.split_identifiers

        tokens = Tokenizer().tokenize(source)
        if split_identifiers:
            tokens = split_ambiguous_tokens(tokens, self.context)
        return resolve_random_alternatives(tokens, self.rng)

    def parse(self, source: str, split_identifiers: bool | None = None) -> Any:
        """
        Parse an expression string to a term.

        Args:
            source: The expression
            split_identifiers: Split "xy" and "3x" (defaults to the parser setting)

        Returns:
            Root term, as built by the builder

        Raises:
            ParseError: If the expression is invalid
        """
        self._tokens = self.tokenize(source, split_identifiers)
        self._pos = 0
        logger.debug(
            "Parsing tokens %s",
            self._tokens,
            extra={"expression": source, "tokens": self._tokens},
        )

        try:
            self._next()
            term = self.parse_term()
            # The sentinel must be the last token and must be the lookahead.
            if self._token != END or self._pos != len(self._tokens):
                raise self._error(ErrorTag.TRAILING_TOKENS)
        except ParseError as exc:
            logger.debug(
                "Failed to parse: %s",
                exc,
                extra={
                    "expression": source,
                    "error_tag": exc.tag.value,
                    "position": exc.position,
                },
            )
            raise

        return term

    # Cursor

    def _next(self) -> None:
        """Advance the lookahead; past the end it stays at END."""
        if self._pos >= len(self._tokens):
            self._token = END
            return
        self._token = self._tokens[self._pos]
        self._pos += 1

    def _expect(self, symbol: str, tag: ErrorTag) -> None:
        if self._token != symbol:
            raise self._error(tag)
        self._next()

    def _error(self, tag: ErrorTag, detail: str | None = None) -> ParseError:
        return ParseError(tag, self._token, max(self._pos - 1, 0), detail)

    # Grammar

    def parse_term(self) -> Any:
        return self.parse_lor()

    def parse_lor(self) -> Any:
        return self._parse_single_binary(("||",), self.parse_land)

    def parse_land(self) -> Any:
        return self._parse_single_binary(("&&",), self.parse_equal)

    def parse_equal(self) -> Any:
        return self._parse_single_binary(("==", "!="), self.parse_relational)

    def parse_relational(self) -> Any:
        return self._parse_single_binary(("<", "<=", ">", ">="), self.parse_add)

    def _parse_single_binary(
        self, operators: tuple[str, ...], parse_operand: Callable[[], Any]
    ) -> Any:
        """operand [ op operand ], at most one operator"""
        left = parse_operand()
        if self._token in operators:
            op = self._token
            self._next()
            right = parse_operand()
            return self.builder.create_op(op, [left, right], [])
        return left

    def parse_add(self) -> Any:
        """
        Parse a sum.

        "a-b" becomes -(a, b); longer chains become one n-ary sum with the
        subtracted operands negated: "a-b+c" -> +(a, .-(b), c).
        """
        operands = [self.parse_mul()]
        operators: list[str] = []

        while self._token in ("+", "-"):
            operators.append(self._token)
            self._next()
            operands.append(self.parse_mul())

        if not operators:
            return operands[0]

        if operators == ["-"]:
            return self.builder.create_op("-", operands, [])

        for i, op in enumerate(operators):
            if op == "-":
                operands[i + 1] = self.builder.create_op(".-", [operands[i + 1]], [])
        return self.builder.create_op("+", operands, [])

    def parse_mul(self) -> Any:
        """
        Parse a product, including implicit multiplication.

        An identifier or "(" right after a factor continues the product:
        "3 x (y+1)" has three factors. Chains containing "/" fold left to
        right into binary nodes; pure products become one n-ary "*".
        """
        operands = [self.parse_pow()]
        operators: list[str] = []

        while self._token in ("*", "/") or (
            self._token != END
            and (is_identifier(self._token) or self._token == "(")
        ):
            if self._token in ("*", "/"):
                operators.append(self._token)
                self._next()
            else:
                operators.append("*")
            operands.append(self.parse_pow())

        if len(operands) == 1:
            return operands[0]

        if operators == ["/"]:
            return self.builder.create_op("/", operands, [])

        if "/" in operators:
            result = operands[0]
            for op, operand in zip(operators, operands[1:]):
                result = self.builder.create_op(op, [result, operand], [])
            return result

        return self.builder.create_op("*", operands, [])

    def parse_pow(self) -> Any:
        base = self.parse_unary()
        if self._token == "^":
            self._next()
            exponent = self.parse_unary()
            return self.builder.create_op("^", [base, exponent], [])
        return base

    def parse_unary(self) -> Any:
        if self._token == "-":
            self._next()
            return self.builder.create_op(".-", [self.parse_mul()], [])

        if self._token == "!":
            # No postfix indexing after a logical not.
            self._next()
            return self.builder.create_op("!", [self.parse_infix()], [])

        term = self.parse_infix()
        if self._token == "[":
            term = self.parse_postfix(term)
        return term

    def parse_infix(self) -> Any:
        token = self._token
        builder = self.builder

        if token == "true" or token == "false":
            self._next()
            return builder.create_const_boolean(token == "true")

        if token == INFINITY:
            self._next()
            return builder.create_const_infinity()

        if is_imaginary(token):
            self._next()
            body = token[:-1] or "1"
            imag = int(body) if is_integer(body) else float(body)
            return builder.create_const_complex(0, imag)

        if is_integer(token):
            self._next()
            return builder.create_const_int(int(token))

        if is_real(token):
            self._next()
            return builder.create_const_real(float(token))

        if self.context.is_irrational(token):
            self._next()
            return builder.create_const_irrational(token)

        if self.context.is_function(token):
            return self.parse_function_call()

        if is_identifier(token):
            self._next()
            return builder.create_var(token)

        if token == "(":
            self._next()
            term = self.parse_term()
            self._expect(")", ErrorTag.EXPECTED_RPAREN)
            return term

        if token == "|":
            self._next()
            term = self.parse_term()
            self._expect("|", ErrorTag.EXPECTED_PIPE)
            return builder.create_op("abs", [term], [])

        if token == "[":
            return self.parse_matrix_or_vector()

        if token == "{":
            return self.parse_set()

        if token == END:
            raise self._error(ErrorTag.UNEXPECTED_END)
        raise self._error(ErrorTag.UNEXPECTED_TOKEN)

    def parse_function_call(self) -> Any:
        """
        Parse a built-in function call.

        Forms:
        - sin(x), binomial(n, k), int(f, x, a, b)
        - zeros<2,3>() with a dimension list
        - sin x (unary functions only, without dimensions)
        """
        name = self._token
        arities = self.context.arities(name)
        self._next()

        dims: list[Any] = []
        if self._token == "<":
            self._next()
            dims.append(self.parse_unary())
            while self._token == ",":
                self._next()
                dims.append(self.parse_unary())
            self._expect(">", ErrorTag.EXPECTED_RANGLE)

        if self._token == "(":
            self._next()
            args: list[Any] = []
            if 0 not in arities:
                args.append(self.parse_term())
                while self._token == ",":
                    self._next()
                    args.append(self.parse_term())
            self._expect(")", ErrorTag.EXPECTED_RPAREN)
            if len(args) not in arities:
                raise self._error(
                    ErrorTag.WRONG_ARGUMENT_COUNT,
                    f"function {name} got {len(args)} argument(s)",
                )
            return self.builder.create_op(name, args, dims)

        if 1 in arities and not dims:
            return self.builder.create_op(name, [self.parse_unary()], [])

        raise self._error(ErrorTag.EXPECTED_CALL, f"function {name}")

    def parse_postfix(self, term: Any) -> Any:
        """t[i] -> index1(t, i), t[i,j] -> index2(t, i, j)"""
        self._next()  # Consume [
        first = self.parse_term()
        if self._token == ",":
            self._next()
            second = self.parse_term()
            result = self.builder.create_op("index2", [term, first, second], [])
        else:
            result = self.builder.create_op("index1", [term, first], [])
        self._expect("]", ErrorTag.EXPECTED_RBRACKET)
        return result

    def parse_vector(self) -> Any:
        """Parse a vector body; the opening "[" is the lookahead."""
        self._next()  # Consume [
        return self._parse_vector_elements()

    def _parse_vector_elements(self) -> Any:
        elements: list[Any] = []
        if self._token != "]":
            elements.append(self.parse_term())
            while self._token == ",":
                self._next()
                elements.append(self.parse_term())
        self._expect("]", ErrorTag.EXPECTED_RBRACKET)
        return self.builder.create_op("vec", elements, [])

    def parse_matrix_or_vector(self) -> Any:
        """
        Parse [1, 2] (vector) or [[1, 2], [3, 4]] (matrix of row vectors).

        A "[" directly after the opening bracket selects the matrix form.
        """
        self._next()  # Consume [
        if self._token != "[":
            return self._parse_vector_elements()

        rows = [self.parse_vector()]
        while self._token == ",":
            self._next()
            if self._token != "[":
                raise self._error(ErrorTag.EXPECTED_LBRACKET)
            rows.append(self.parse_vector())
        self._expect("]", ErrorTag.EXPECTED_RBRACKET)
        return self.builder.create_op("matrix", rows, [])

    def parse_set(self) -> Any:
        """Parse {a, b, ...}; the empty set is not supported."""
        self._next()  # Consume {
        elements = [self.parse_term()]
        while self._token == ",":
            self._next()
            elements.append(self.parse_term())
        self._expect("}", ErrorTag.EXPECTED_RBRACE)
        return self.builder.create_op("set", elements, [])


def parse(
    source: str,
    split_identifiers: bool | None = None,
    *,
    context: Context | None = None,
    builder: TermBuilder | None = None,
    rng: random.Random | None = None,
) -> Any:
    """
    Parse an expression with a fresh Parser.

    Args:
        source: The expression
        split_identifiers: Split "xy" and "3x" (defaults to Settings.SPLIT_IDENTIFIERS)
        context: Function and constant tables
        builder: Term factory
        rng: Random source for "{+|-}" alternatives

    Returns:
        Root term

    Raises:
        ParseError: If the expression is invalid
    """
    parser = Parser(context=context, builder=builder, rng=rng)
    return parser.parse(source, split_identifiers)
