"""
Tokenizer for math expressions typed by students and course authors.

The lexer is a single character scan: whitespace separates tokens, a fixed set
of delimiters is emitted as single tokens (two-character operators are merged
by one character of lookahead), and everything else accumulates into the
current token. Tokens are plain strings without a type tag; the predicates at
the bottom of this module classify them on demand.

The lexer is total. Validation of identifiers and numbers happens later in the
parser.
"""

import logging

logger = logging.getLogger(__name__)

# Appended to every token stream. Never produced by the scan of valid input.
END = "§"

WHITESPACE = " \t\n"
DELIMITERS = "+-*/()^{},|[]<>=!&@"
COMPOUND_OPERATORS = frozenset({"&&", "||", ">=", "<=", "==", "!=", "@@"})

DIGITS = "0123456789"
NONZERO_DIGITS = "123456789"


class Tokenizer:
    """
    Splits an expression into string tokens.

    Examples:
    - "3x + 1" -> ["3x", "+", "1", "§"]
    - "a<=b" -> ["a", "<=", "b", "§"]
    - "sin(x)" -> ["sin", "(", "x", ")", "§"]
    """

    def tokenize(self, source: str) -> list[str]:
        """
        Tokenize an expression.

        Args:
            source: The expression text

        Returns:
            List of tokens, always terminated by END
        """
        tokens: list[str] = []
        current = ""
        i = 0
        n = len(source)

        while i < n:
            ch = source[i]

            if ch in WHITESPACE:
                if current:
                    tokens.append(current)
                    current = ""
            elif ch in DELIMITERS:
                if current:
                    tokens.append(current)
                    current = ""
                # One character of lookahead for "&&", "<=", ...
                pair = source[i : i + 2]
                if pair in COMPOUND_OPERATORS:
                    tokens.append(pair)
                    i += 1
                else:
                    tokens.append(ch)
            else:
                current += ch

            i += 1

        if current:
            tokens.append(current)

        tokens.append(END)
        logger.debug("Scanned %r into %d tokens", source, len(tokens))
        return tokens


# Token classification


def is_digit(ch: str) -> bool:
    return len(ch) == 1 and ch in DIGITS


def is_nonzero_digit(ch: str) -> bool:
    return len(ch) == 1 and ch in NONZERO_DIGITS


def is_alpha(ch: str) -> bool:
    """ASCII letters and the underscore count as alphabetic."""
    return len(ch) == 1 and (("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_")


def is_identifier(token: str) -> bool:
    """ID = ALPHA { ALPHA | DIGIT }"""
    if not token or not is_alpha(token[0]):
        return False
    return all(is_alpha(ch) or is_digit(ch) for ch in token[1:])


def is_integer(token: str) -> bool:
    """INT = "0" | NONZERO_DIGIT { DIGIT }"""
    if token == "0":
        return True
    if not token or not is_nonzero_digit(token[0]):
        return False
    return all(is_digit(ch) for ch in token[1:])


def is_real(token: str) -> bool:
    """REAL = INT "." { DIGIT }"""
    parts = token.split(".")
    if len(parts) != 2:
        return False
    whole, fraction = parts
    return is_integer(whole) and all(is_digit(ch) for ch in fraction)


def is_imaginary(token: str) -> bool:
    """
    IMAG = ( REAL | INT ) "i"

    A bare "i" is the imaginary unit.
    """
    if not token.endswith("i"):
        return False
    body = token[:-1]
    return body == "" or is_real(body) or is_integer(body)
