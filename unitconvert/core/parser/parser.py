"""Recursive descent parser: tokens -> AST.

Grammar::

    quantity    := sign? NUMBER <whitespace> unit_expr
    operand     := quantity | unit_expr
    definition  := NUMBER? NAME '=' (dimension | unit_expr)
    unit_expr   := term (('+' | '-') NUMBER)*
    term        := factor (('*' | '/' | <whitespace>) factor)*
    factor      := primary ('^' signed_int)*
    primary     := NAME | NUMBER | '(' term ')'
    dimension   := '[' dim_term ']'
    dim_term    := dim_factor (('*' | '/' | <whitespace>) dim_factor)*
    dim_factor  := (DIM_SYMBOL | '1' | '(' dim_term ')') ('^' signed_int)*
"""

from __future__ import annotations

import math

from unitconvert.core.dimension import Dimension, DIMENSIONLESS, DIMENSION_SYMBOLS
from unitconvert.core.errors import (
    ParseError,
    MalformedQuantityError,
    MalformedDefinitionError,
    MalformedExpressionError,
)
from unitconvert.core.parser.tokenizer import Token, TokenType, TokenizeError, tokenize
from unitconvert.core.parser.ast_nodes import (
    NumberNode,
    UnitRef,
    BinaryOp,
    PowerNode,
    OffsetNode,
    UnitExpr,
    DimensionRef,
    QuantityNode,
    DefinitionNode,
)

_FACTOR_START = (TokenType.NAME, TokenType.NUMBER, TokenType.LPAREN)
MAX_NESTING = 32  # parenthesis depth


class Parser:
    """Parses a token stream into quantity, unit or definition nodes.

    The first grammar violation raises ``error_cls`` so that callers get the
    error kind that matches what they were parsing.
    """

    def __init__(self, tokens: list[Token], source: str, error_cls: type[ParseError] = MalformedExpressionError):
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.depth = 0
        self.error_cls = error_cls

    # ── Entry points ──

    def parse_quantity(self) -> QuantityNode:
        magnitude = self._parse_signed_number("magnitude")
        tok = self._peek()
        if tok.type == TokenType.EOF:
            self._error(f"Missing unit after magnitude {magnitude!r}", tok)
        if not tok.spaced:
            self._error("Expected whitespace between magnitude and unit", tok)
        unit = self._parse_unit_expr()
        self._expect_end()
        return QuantityNode(magnitude=magnitude, unit=unit, unit_text=self.source[tok.col:].strip())

    def parse_operand(self) -> QuantityNode:
        """A quantity, or a bare unit expression with an implied magnitude of 1."""
        if self._starts_with_magnitude():
            return self.parse_quantity()
        unit = self.parse_unit()
        return QuantityNode(magnitude=1.0, unit=unit, unit_text=self.source.strip())

    def parse_unit(self) -> UnitExpr:
        if self._at_end():
            self._error("Missing unit", self._peek())
        unit = self._parse_unit_expr()
        self._expect_end()
        return unit

    def parse_definition(self) -> DefinitionNode:
        if not any(t.type == TokenType.EQUALS for t in self.tokens):
            self._error("Missing '=' separator in unit definition", self._peek())

        lhs_scale = 1.0
        if self._peek().type == TokenType.NUMBER:
            lhs_scale = self._number(self._advance())

        name_tok = self._peek()
        if name_tok.type == TokenType.EQUALS:
            self._error("Missing unit name on the left-hand side", name_tok)
        if name_tok.type != TokenType.NAME:
            self._error(f"Expected unit name, got '{name_tok.value}'", name_tok)
        self._advance()

        eq_tok = self._peek()
        if eq_tok.type != TokenType.EQUALS:
            self._error(f"Left-hand side must be a single unit name, got '{eq_tok.value}'", eq_tok)
        self._advance()  # consume =

        start = self._peek()
        if start.type == TokenType.EOF:
            self._error("Missing right-hand side of unit definition", start)
        if start.type == TokenType.LBRACKET:
            rhs = self._parse_dimension()
        else:
            rhs = self._parse_unit_expr()
        self._expect_end()

        return DefinitionNode(
            symbol=name_tok.value,
            rhs=rhs,
            lhs_scale=lhs_scale,
            rhs_text=self.source[start.col:].strip(),
        )

    # ── Unit expressions ──

    def _parse_unit_expr(self) -> UnitExpr:
        expr = self._parse_term()
        while self._peek().type in (TokenType.PLUS, TokenType.MINUS):
            op = self._advance()
            num_tok = self._expect(TokenType.NUMBER, "offset value")
            value = self._number(num_tok)
            expr = OffsetNode(term=expr, offset=value if op.type == TokenType.PLUS else -value, col=op.col)
        return expr

    def _parse_term(self) -> UnitExpr:
        left = self._parse_factor()
        while True:
            tok = self._peek()
            if tok.type == TokenType.STAR:
                self._advance()
                left = BinaryOp("*", left, self._parse_factor(), col=tok.col)
            elif tok.type == TokenType.SLASH:
                self._advance()
                left = BinaryOp("/", left, self._parse_factor(), col=tok.col)
            elif tok.type in _FACTOR_START and tok.spaced:
                # implicit multiplication: "kg m^2"
                left = BinaryOp("*", left, self._parse_factor(), col=tok.col)
            else:
                return left

    def _parse_factor(self) -> UnitExpr:
        node = self._parse_primary()
        while self._peek().type == TokenType.CARET:
            tok = self._advance()
            node = PowerNode(base=node, exponent=self._parse_exponent(), col=tok.col)
        return node

    def _parse_primary(self) -> UnitExpr:
        tok = self._peek()
        if tok.type == TokenType.NAME:
            self._advance()
            return UnitRef(symbol=tok.value, col=tok.col)
        if tok.type == TokenType.NUMBER:
            self._advance()
            return NumberNode(value=self._number(tok), col=tok.col)
        if tok.type == TokenType.LPAREN:
            self._open_group(tok)
            inner = self._parse_term()
            self._close_group()
            return inner
        self._error(f"Expected unit, got {self._describe(tok)}", tok)

    # ── Dimension expressions ──

    def _parse_dimension(self) -> DimensionRef:
        open_tok = self._advance()  # consume [
        dim = self._parse_dim_term()
        self._expect(TokenType.RBRACKET, "']'")
        return DimensionRef(dimension=dim, col=open_tok.col)

    def _parse_dim_term(self) -> Dimension:
        dim = self._parse_dim_factor()
        while True:
            tok = self._peek()
            if tok.type == TokenType.STAR:
                self._advance()
                dim = dim * self._parse_dim_factor()
            elif tok.type == TokenType.SLASH:
                self._advance()
                dim = dim / self._parse_dim_factor()
            elif tok.type in _FACTOR_START and tok.spaced:
                dim = dim * self._parse_dim_factor()
            else:
                return dim

    def _parse_dim_factor(self) -> Dimension:
        tok = self._peek()
        if tok.type == TokenType.NAME:
            if tok.value not in DIMENSION_SYMBOLS:
                valid = ", ".join(sorted(DIMENSION_SYMBOLS))
                self._error(f"Unknown dimension symbol '{tok.value}'. Valid: {valid}", tok)
            self._advance()
            dim = DIMENSION_SYMBOLS[tok.value]
        elif tok.type == TokenType.NUMBER and tok.value == "1":
            self._advance()
            dim = DIMENSIONLESS
        elif tok.type == TokenType.LPAREN:
            self._open_group(tok)
            dim = self._parse_dim_term()
            self._close_group()
        else:
            self._error(f"Expected dimension symbol, got {self._describe(tok)}", tok)

        while self._peek().type == TokenType.CARET:
            self._advance()
            dim = dim ** self._parse_exponent()
        return dim

    # ── Helper methods ──

    def _parse_signed_number(self, description: str) -> float:
        sign = 1.0
        tok = self._peek()
        if tok.type in (TokenType.PLUS, TokenType.MINUS):
            self._advance()
            if tok.type == TokenType.MINUS:
                sign = -1.0
            num_tok = self._peek()
            if num_tok.type != TokenType.NUMBER or num_tok.spaced:
                self._error(f"Expected number after '{tok.value}'", num_tok)
        num_tok = self._peek()
        if num_tok.type != TokenType.NUMBER:
            self._error(f"Missing {description}: expected a number, got {self._describe(num_tok)}", num_tok)
        self._advance()
        return sign * self._number(num_tok)

    def _parse_exponent(self) -> int:
        tok = self._peek()
        sign = 1
        if tok.type in (TokenType.PLUS, TokenType.MINUS):
            self._advance()
            sign = -1 if tok.type == TokenType.MINUS else 1
        num_tok = self._expect(TokenType.NUMBER, "integer exponent")
        value = self._number(num_tok)
        if not value.is_integer():
            self._error(f"Exponent must be an integer, got '{num_tok.value}'", num_tok)
        return sign * int(value)

    def _starts_with_magnitude(self) -> bool:
        i = self.pos
        if self.tokens[i].type in (TokenType.PLUS, TokenType.MINUS):
            i += 1
            if self.tokens[i].spaced:
                return False
        if self.tokens[i].type != TokenType.NUMBER:
            return False
        nxt = self.tokens[i + 1]
        return nxt.spaced and nxt.type in _FACTOR_START

    def _open_group(self, tok: Token) -> None:
        self._advance()
        self.depth += 1
        if self.depth > MAX_NESTING:
            self._error("Expression nested too deeply", tok)

    def _close_group(self) -> None:
        self._expect(TokenType.RPAREN, "')'")
        self.depth -= 1

    def _number(self, tok: Token) -> float:
        value = float(tok.value)
        if not math.isfinite(value):
            self._error(f"Number '{tok.value}' is out of range", tok)
        return value

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != TokenType.EOF:
            self.pos += 1
        return tok

    def _at_end(self) -> bool:
        return self.tokens[self.pos].type == TokenType.EOF

    def _expect(self, tok_type: TokenType, description: str) -> Token:
        tok = self._peek()
        if tok.type != tok_type:
            self._error(f"Expected {description}, got {self._describe(tok)}", tok)
        return self._advance()

    def _expect_end(self) -> None:
        tok = self._peek()
        if tok.type != TokenType.EOF:
            self._error(f"Unexpected {self._describe(tok)}", tok)

    @staticmethod
    def _describe(tok: Token) -> str:
        return "end of input" if tok.type == TokenType.EOF else f"'{tok.value}'"

    def _error(self, message: str, token: Token):
        raise self.error_cls(message, self.source, token.col)


def _parser(text: str, error_cls: type[ParseError]) -> Parser:
    try:
        tokens = tokenize(text)
    except TokenizeError as e:
        raise error_cls(e.message, e.text, e.col) from e
    return Parser(tokens, text, error_cls)


def parse_quantity_ast(text: str) -> QuantityNode:
    return _parser(text, MalformedQuantityError).parse_quantity()


def parse_operand_ast(text: str) -> QuantityNode:
    return _parser(text, MalformedQuantityError).parse_operand()


def parse_unit_ast(text: str) -> UnitExpr:
    return _parser(text, MalformedExpressionError).parse_unit()


def parse_definition_ast(text: str) -> DefinitionNode:
    return _parser(text, MalformedDefinitionError).parse_definition()
