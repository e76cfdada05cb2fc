"""
Character-class scanner: source text → flat token list.

Each ``extract_*`` helper returns ``(matched, rest)``; ``build_token_list``
chains them and decides whether a '-' is a subtraction or a negation by
looking at the previous token.
"""
from typing import Callable, List, Tuple

from errors import MalformedInput
from token_model import Number, Operator, Token

OPERATOR_CHARS = '+-*/'


def extract_while(accept: Callable[[str], bool], s: str) -> Tuple[str, str]:
    end = 0
    while end < len(s) and accept(s[end]):
        end += 1
    return s[:end], s[end:]


def extract_digits(s: str) -> Tuple[str, str]:
    return extract_while(lambda c: c.isascii() and c.isdigit(), s)


def extract_operator(s: str) -> Tuple[str, str]:
    if s and s[0] in OPERATOR_CHARS:
        return s[:1], s[1:]
    return '', s


def extract_whitespace(s: str) -> Tuple[str, str]:
    return extract_while(str.isspace, s)


def extract_next_token(s: str) -> Tuple[str, str]:
    """Skip whitespace and return the next digit run or operator char."""
    _, s = extract_whitespace(s)
    if not s:
        return '', ''
    first = s[0]
    if first.isascii() and first.isdigit():
        return extract_digits(s)
    if first in OPERATOR_CHARS:
        return extract_operator(s)
    raise MalformedInput(f"unexpected character {first!r}")


def build_token_list(expr: str) -> List[Token]:
    """Tokenize *expr*; '-' becomes NEG at the start or after an operator."""
    tokens: List[Token] = []
    rest = expr
    while True:
        text, rest = extract_next_token(rest)
        if not text:
            break
        if text == '-':
            follows_operator = not tokens or tokens[-1].is_operator
            tokens.append(Token(Operator.NEG if follows_operator else Operator.SUB))
        elif text in OPERATOR_CHARS:
            tokens.append(Token(Operator.from_symbol(text)))
        else:
            tokens.append(Token(Number.parse(text)))
    return tokens
