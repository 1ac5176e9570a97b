"""Input normalization and parsing module.

This module handles:
- Expression normalization (glyph substitution, percent, ANS, factorial,
  implicit multiplication)
- Tokenizing canonical expressions
- Recursive-descent parsing into a small AST restricted to the whitelisted
  operators, functions and constants
- Balancing checks for parentheses
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import (
    ANS_REGEX,
    CONSTANT_NAMES,
    DIGIT_PAREN_REGEX,
    FACTORIAL_REGEX,
    FUNCTION_ARITY,
    MAX_EXPRESSION_DEPTH,
    MAX_INPUT_LENGTH,
    NAME_REGEX,
    NUMBER_REGEX,
    OPERATOR_GLYPHS,
    PAREN_DIGIT_REGEX,
    PAREN_PAREN_REGEX,
    PERCENT_REGEX,
    PI_GLYPH,
)
from .logging_config import get_logger
from .types import DEFAULT_MODE, EvaluationMode, ParseError, ValidationError

logger = get_logger("parser")


def _format_answer(value: float | None) -> str:
    if value is None:
        return "(0)"
    if float(value).is_integer() and abs(value) < 1e16:
        return f"({int(value)})"
    return f"({value!r})"


def preprocess(raw: str, mode: EvaluationMode = DEFAULT_MODE) -> str:
    """Rewrite a raw expression into canonical form.

    Applies, in order:
    - Trims whitespace and converts the Greek π to pi
    - Converts × ÷ − – to * / - and the colon-as-divide convention
    - Converts ^ to **
    - Handles percentages (50% -> (50/100))
    - Substitutes ANS with the previous answer, or 0 when there is none
    - Rewrites n! and (expr)! to fact(...)
    - Inserts implicit multiplication for 2(, )2 and )(

    The angle unit is not written into the text; worker.evaluate_safely()
    applies it when the trig calls run.

    Never raises: malformed input is passed through and rejected later
    by the parser.

    Args:
        raw: Raw input string from user
        mode: Angle unit and previous answer for this evaluation

    Returns:
        Canonical expression string
    """
    processed = (raw or "").strip()
    processed = processed.replace(PI_GLYPH, "pi")
    for glyph, operator in OPERATOR_GLYPHS.items():
        processed = processed.replace(glyph, operator)
    processed = processed.replace("^", "**")

    processed = PERCENT_REGEX.sub(r"(\1/100)", processed)
    processed = ANS_REGEX.sub(
        lambda _m: _format_answer(mode.previous_answer), processed
    )
    processed = FACTORIAL_REGEX.sub(r"fact(\1)", processed)

    processed = DIGIT_PAREN_REGEX.sub(r"\1*(", processed)
    processed = PAREN_DIGIT_REGEX.sub(r")*\1", processed)
    processed = PAREN_PAREN_REGEX.sub(")*(", processed)

    return processed


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses are balanced. Returns (is_balanced, error_position)."""
    stack: list[int] = []
    for i, char in enumerate(input_str):
        if char == "(":
            stack.append(i)
        elif char == ")":
            if not stack:
                return False, i
            stack.pop()
    if stack:
        return False, stack[0]  # Return position of first unmatched
    return True, None


# AST nodes


@dataclass(frozen=True)
class Num:
    value: float


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple["Node", ...]


Node = Num | UnaryOp | BinOp | Call


@dataclass(frozen=True)
class Token:
    kind: str  # NUM, NAME, OP, END
    text: str
    pos: int


_OPERATORS = ("**", "*", "/", "+", "-", "(", ")", ",", "!")


def tokenize(expr: str) -> list[Token]:
    """Split a canonical expression into tokens.

    Raises:
        ParseError: On any character outside the canonical vocabulary
    """
    tokens: list[Token] = []
    i = 0
    while i < len(expr):
        char = expr[i]
        if char.isspace():
            i += 1
            continue
        match = NUMBER_REGEX.match(expr, i)
        if match:
            tokens.append(Token("NUM", match.group(0), i))
            i = match.end()
            continue
        match = NAME_REGEX.match(expr, i)
        if match:
            tokens.append(Token("NAME", match.group(0), i))
            i = match.end()
            continue
        for op in _OPERATORS:
            if expr.startswith(op, i):
                tokens.append(Token("OP", op, i))
                i += len(op)
                break
        else:
            raise ParseError(f"Unexpected character {char!r} at position {i}")
    tokens.append(Token("END", "", len(expr)))
    return tokens


class _Parser:
    """Recursive-descent parser over a token list.

    Grammar::

        expression := term (("+" | "-") term)*
        term       := unary (("*" | "/") unary)*
        unary      := ("+" | "-") unary | power
        power      := postfix ("**" unary)?
        postfix    := primary "!"*
        primary    := NUMBER | NAME "(" args ")" | NAME | "(" expression ")"
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _accept(self, op: str) -> bool:
        if self.current.kind == "OP" and self.current.text == op:
            self.pos += 1
            return True
        return False

    def _expect(self, op: str) -> None:
        if not self._accept(op):
            token = self.current
            found = token.text or "end of input"
            raise ParseError(f"Expected {op!r} at position {token.pos}, found {found!r}")

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise ValidationError(
                f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)",
                "TOO_DEEP",
            )

    def parse(self) -> Node:
        node = self.expression()
        if self.current.kind != "END":
            raise ParseError(
                f"Unexpected token {self.current.text!r} at position {self.current.pos}"
            )
        return node

    def expression(self) -> Node:
        self._enter()
        node = self.term()
        while self.current.kind == "OP" and self.current.text in ("+", "-"):
            op = self._advance().text
            node = BinOp(op, node, self.term())
        self.depth -= 1
        return node

    def term(self) -> Node:
        node = self.unary()
        while self.current.kind == "OP" and self.current.text in ("*", "/"):
            op = self._advance().text
            node = BinOp(op, node, self.unary())
        return node

    def unary(self) -> Node:
        if self.current.kind == "OP" and self.current.text in ("+", "-"):
            self._enter()
            op = self._advance().text
            node = UnaryOp(op, self.unary())
            self.depth -= 1
            return node
        return self.power()

    def power(self) -> Node:
        base = self.postfix()
        if self._accept("**"):
            self._enter()
            node = BinOp("**", base, self.unary())
            self.depth -= 1
            return node
        return base

    def postfix(self) -> Node:
        node = self.primary()
        while self._accept("!"):
            node = Call("fact", (node,))
        return node

    def primary(self) -> Node:
        token = self.current
        if token.kind == "NUM":
            self._advance()
            return Num(float(token.text))
        if token.kind == "NAME":
            self._advance()
            if self._accept("("):
                return self._call(token)
            if token.text in CONSTANT_NAMES:
                return Call(token.text, ())
            logger.warning("Blocked unknown identifier %r", token.text)
            raise ParseError(f"Unknown identifier {token.text!r}")
        if self._accept("("):
            node = self.expression()
            self._expect(")")
            return node
        found = token.text or "end of input"
        raise ParseError(f"Unexpected {found!r} at position {token.pos}")

    def _call(self, name_token: Token) -> Node:
        name = name_token.text
        if name not in FUNCTION_ARITY:
            logger.warning("Blocked forbidden function %r", name)
            raise ParseError(f"Function {name!r} not allowed", "FORBIDDEN_FUNCTION")
        args: list[Node] = []
        if not self._accept(")"):
            args.append(self.expression())
            while self._accept(","):
                args.append(self.expression())
            self._expect(")")
        low, high = FUNCTION_ARITY[name]
        if len(args) < low or (high is not None and len(args) > high):
            raise ParseError(
                f"Function {name!r} called with {len(args)} argument(s)",
                "ARITY_ERROR",
            )
        return Call(name, tuple(args))


def parse_preprocessed(expr: str) -> Node:
    """Parse a canonical expression into an AST.

    Args:
        expr: Output of preprocess()

    Returns:
        Root AST node

    Raises:
        ValidationError: If the input is empty, too long or too deeply nested
        ParseError: On syntax errors, unknown identifiers or wrong arity
    """
    if not expr or not expr.strip():
        raise ValidationError("Input cannot be empty", "EMPTY_INPUT")
    if len(expr) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    balanced, position = is_balanced(expr)
    if not balanced:
        raise ParseError(f"Unbalanced parenthesis at position {position}", "UNBALANCED")
    return _Parser(tokenize(expr)).parse()
