"""
Token rewrite passes applied between scanning and parsing.

Pass A (split_ambiguous_tokens) breaks juxtaposed factors apart so that the
grammar's implicit multiplication can see them: "xy" -> "x" "y" and
"3x" -> "3" "x".

Pass B (resolve_random_alternatives) turns exercise variant syntax such as
"1{+|-}2" into one concrete operator, drawn from the supplied random source.

Neither pass can fail. Tokens that do not match a pattern pass through.
"""

import logging
import random

from .context import Context
from .tokenizer import is_alpha, is_digit, is_identifier

logger = logging.getLogger(__name__)

BOOLEANS = frozenset({"true", "false"})
ALTERNATIVE_OPERATORS = frozenset({"+", "-", "*", "/"})


def split_ambiguous_tokens(tokens: list[str], context: Context) -> list[str]:
    """
    Split identifiers into letters and numeric coefficients from factors.

    Examples:
    - "xy" -> "x", "y"
    - "3x" -> "3", "x"
    - "3xy" -> "3", "xy" (the remainder is not split again)
    - "sin", "pi", "true" are kept

    Args:
        tokens: Scanned tokens
        context: Known function and constant names

    Returns:
        New token list
    """
    result: list[str] = []

    for token in tokens:
        if (
            token not in BOOLEANS
            and is_identifier(token)
            and not context.is_function(token)
            and not context.is_builtin(token)
        ):
            result.extend(token)
        elif len(token) >= 2 and is_digit(token[0]) and is_alpha(token[-1]):
            digits = 0
            while is_digit(token[digits]):
                digits += 1
            result.append(token[:digits])
            result.append(token[digits:])
        else:
            result.append(token)

    return result


def resolve_random_alternatives(
    tokens: list[str], rng: random.Random | None = None
) -> list[str]:
    """
    Replace groups like "{+|-}" with one randomly chosen operator.

    A group must contain only the operators + - * / separated by "|".
    Anything else starting with "{" is left alone (it is a set literal).

    Args:
        tokens: Token list
        rng: Random source, defaults to the module-level generator

    Returns:
        New token list
    """
    choose = rng.choice if rng is not None else random.choice
    result: list[str] = []
    i = 0
    n = len(tokens)

    while i < n:
        token = tokens[i]
        if token == "{" and i + 1 < n and tokens[i + 1] != "}":
            alternatives, end = _match_alternatives(tokens, i + 1)
            if alternatives is not None:
                choice = choose(alternatives)
                logger.debug("Resolved %s to '%s'", alternatives, choice)
                result.append(choice)
                i = end + 1
                continue
        result.append(token)
        i += 1

    return result


def _match_alternatives(tokens: list[str], start: int) -> tuple[list[str] | None, int]:
    """
    Match "op | op | ... }" beginning at start.

    Returns the alternatives and the index of the closing brace, or
    (None, start) if the tokens do not form a group.
    """
    alternatives: list[str] = []
    k = start
    n = len(tokens)

    while k < n:
        if tokens[k] == "}":
            return alternatives, k
        if tokens[k] not in ALTERNATIVE_OPERATORS:
            return None, start
        alternatives.append(tokens[k])
        k += 1
        if k >= n or tokens[k] not in ("|", "}"):
            return None, start
        if tokens[k] == "}":
            return alternatives, k
        k += 1

    return None, start
