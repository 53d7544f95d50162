"""
Monkey Language Parser

Parses a Monkey token stream into a `Program` tree of AST nodes.

The parser is a Pratt (top-down operator precedence) parser. Every token kind may
register a *prefix* handler, used when the token starts an operand, and an *infix*
handler, used when the token sits between two operands. A single loop in
`parse_expression` decides how far an operand extends by comparing the running
minimum binding power with the precedence of the upcoming token. New operators are
added by registering handlers and, for infix operators, a precedence level; the
loop itself never changes.

Supported Constructs
--------------------
- Statements: `let <name> = <expr>;`, `return <expr>;`, expression statements,
  `{ ... }` blocks.
- Expressions:
    * identifiers, integers, booleans, strings
    * prefix `!x`, `-x`
    * infix `+ - * / == != < >`, all left-associative
    * assignment `x = <expr>` (right-associative)
    * grouping `( ... )`, calls `f(a, b)`, indexing `a[i]`, field lookup `a.b`
    * `if (...) { ... } else { ... }`, `fn(a, b) { ... }`,
      `for (init; cond; update) { ... }`, array `[...]` and hash `{k: v}` literals

Parser Behavior
---------------
- Never raises on malformed input. Problems are recorded in a `Diagnostics`
  accumulator; the offending node is dropped (`None`) and parsing resumes with
  the next statement.
- Two tokens of lookahead (`cur_token`, `peek_token`), one pass, no backtracking.

Entry Points
------------
- `Parser(tokens).parse_program()`: parse a full program, returns a `ParseResult`.
- `parse(source)`: tokenize and parse a source string.

Example
-------
>>> result = parse("-a * b")
>>> result.program.render()
'((-a) * b)'
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum

from monkey.monkey_ast import (
    ArrayLiteral,
    AssignExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    ForExpression,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    MemberExpression,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from monkey.monkey_constants import (
    ASSIGN,
    ASTERISK,
    BANG,
    COLON,
    COMMA,
    DOT,
    ELSE,
    EOF,
    EQ,
    FALSE,
    FOR,
    FUNCTION,
    GT,
    IDENT,
    IF,
    INT,
    LBRACE,
    LBRACKET,
    LET,
    LPAREN,
    LT,
    MINUS,
    NOT_EQ,
    PLUS,
    RBRACE,
    RBRACKET,
    RETURN,
    RPAREN,
    SEMICOLON,
    SLASH,
    STRING,
    TRUE,
    operator_tokens,
)
from monkey.monkey_lexer import CharacterStream, Lexer, Token

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    """Binding strength of a token in infix position, weakest first."""

    LOWEST = 1
    ASSIGN = 2  # x = y
    EQUALS = 3  # ==
    LESSGREATER = 4  # > or <
    SUM = 5  # +
    PRODUCT = 6  # *
    PREFIX = 7  # -x or !x
    CALL = 8  # f(x)
    INDEX = 9  # a[i], a.b


precedences: dict[str, Precedence] = {
    ASSIGN: Precedence.ASSIGN,
    EQ: Precedence.EQUALS,
    NOT_EQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    SLASH: Precedence.PRODUCT,
    ASTERISK: Precedence.PRODUCT,
    LPAREN: Precedence.CALL,
    LBRACKET: Precedence.INDEX,
    DOT: Precedence.INDEX,
}


def precedence_of(kind: str) -> Precedence:
    """Returns the precedence of `kind` in infix position; unmapped kinds are LOWEST."""
    return precedences.get(kind, Precedence.LOWEST)


PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class ParseError(SyntaxError):
    """Raised by `ParseResult.raise_for_errors()` when a parse recorded diagnostics.

    Attributes:
        errors (list[str]): Every message recorded during the parse, in order.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = list(errors)


class Diagnostics:
    """Append-only accumulator of human-readable parse errors."""

    def __init__(self) -> None:
        self._messages: list[str] = []

    def record(self, message: str) -> None:
        logger.debug("parse error: %s", message)
        self._messages.append(message)

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)


@dataclass
class ParseResult:
    """A parsed program together with the errors recorded while parsing it.

    The program may be partially populated when `errors` is non-empty; callers
    must treat such a result as a failed parse.
    """

    program: Program
    errors: list[str]

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> Program:
        """Returns the program, or raises `ParseError` if any errors were recorded."""
        if self.errors:
            raise ParseError(self.errors)
        return self.program


class Parser:
    """
    Monkey Parser Class

    Consumes an exclusively-owned token stream and produces a `Program`.

    Attributes
    ----------
    cur_token : Token
        The token under examination.
    peek_token : Token
        The token after `cur_token`.
    diagnostics : Diagnostics
        Accumulated error messages for this parse.
    prefix_parse_fns : dict[str, PrefixParseFn]
        Token kind -> handler for tokens in operand-starting position.
    infix_parse_fns : dict[str, InfixParseFn]
        Token kind -> handler for tokens in operator position.

    Methods
    -------
    register_prefix(kind, fn) / register_infix(kind, fn)
        Add or replace a handler.
    parse_program() -> ParseResult
        Parse statements until end of input.
    parse_expression(precedence) -> Expression | None
        Parse one expression whose operators all bind tighter than `precedence`.
    """

    def __init__(self, tokens: Iterable[Token], diagnostics: Diagnostics | None = None) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._eof = Token(EOF, "")
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        self.prefix_parse_fns: dict[str, PrefixParseFn] = {}
        self.infix_parse_fns: dict[str, InfixParseFn] = {}

        self.register_prefix(IDENT, self.parse_identifier)
        self.register_prefix(INT, self.parse_integer_literal)
        self.register_prefix(STRING, self.parse_string_literal)
        self.register_prefix(TRUE, self.parse_boolean)
        self.register_prefix(FALSE, self.parse_boolean)
        self.register_prefix(BANG, self.parse_prefix_expression)
        self.register_prefix(MINUS, self.parse_prefix_expression)
        self.register_prefix(LPAREN, self.parse_grouped_expression)
        self.register_prefix(IF, self.parse_if_expression)
        self.register_prefix(FOR, self.parse_for_expression)
        self.register_prefix(FUNCTION, self.parse_function_literal)
        self.register_prefix(LBRACKET, self.parse_array_literal)
        self.register_prefix(LBRACE, self.parse_hash_literal)

        for kind in operator_tokens:
            self.register_infix(kind, self.parse_infix_expression)
        self.register_infix(ASSIGN, self.parse_assign_expression)
        self.register_infix(LPAREN, self.parse_call_expression)
        self.register_infix(LBRACKET, self.parse_index_expression)
        self.register_infix(DOT, self.parse_member_expression)

        # Read two tokens so cur_token and peek_token are both set
        self.cur_token = self._eof
        self.peek_token = self._eof
        self.advance()
        self.advance()

    # Registries

    def register_prefix(self, kind: str, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[kind] = fn

    def register_infix(self, kind: str, fn: InfixParseFn) -> None:
        self.infix_parse_fns[kind] = fn

    # Token navigation

    def advance(self) -> Token:
        self.cur_token = self.peek_token
        self.peek_token = next(self._tokens, self._eof)
        if self.peek_token.kind == EOF:
            self._eof = self.peek_token
        return self.cur_token

    def cur_token_is(self, kind: str) -> bool:
        return self.cur_token.kind == kind

    def peek_token_is(self, kind: str) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: str) -> bool:
        """Advances if the next token is `kind`; otherwise records an error and stays put."""
        if self.peek_token_is(kind):
            self.advance()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek_token.kind)

    def cur_precedence(self) -> Precedence:
        return precedence_of(self.cur_token.kind)

    # Diagnostics

    @property
    def errors(self) -> list[str]:
        return self.diagnostics.messages

    def peek_error(self, kind: str) -> None:
        self.diagnostics.record(
            f"expected next token to be {kind}, got {self.peek_token.kind} instead"
        )

    def no_prefix_parse_fn_error(self, kind: str) -> None:
        self.diagnostics.record(f"no prefix parse function for {kind} found")

    # Statements

    def parse_program(self) -> ParseResult:
        """Parse statements until end of input.

        Statements that fail to parse are left out of the program; the driver
        still advances past their current token so parsing always progresses.
        """
        program = Program()
        while not self.cur_token_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.advance()
        return ParseResult(program, self.diagnostics.messages)

    def parse_statement(self) -> Statement | None:
        # A bare terminator is an empty statement; it also absorbs the `;` left
        # behind by a statement that failed before reaching its end.
        if self.cur_token_is(SEMICOLON):
            return None
        if self.cur_token_is(LET):
            return self.parse_let_statement()
        if self.cur_token_is(RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        tok = self.cur_token

        if not self.expect_peek(IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(ASSIGN):
            return None
        self.advance()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.advance()
        return LetStatement(tok, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        tok = self.cur_token
        self.advance()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.advance()
        return ReturnStatement(tok, value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self.cur_token
        # Nothing parsed yet, so nothing to compare against: start from LOWEST
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.advance()
        return ExpressionStatement(tok, value)

    def parse_block_statement(self) -> BlockStatement | None:
        tok = self.cur_token
        statements: list[Statement] = []
        self.advance()

        while not self.cur_token_is(RBRACE):
            if self.cur_token_is(EOF):
                self.diagnostics.record(
                    f"expected next token to be {RBRACE}, got {EOF} instead"
                )
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.advance()

        return BlockStatement(tok, statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.kind)
            return None
        left = prefix()

        while (
            left is not None
            and not self.peek_token_is(SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.advance()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        tok = self.cur_token
        literal = tok.literal
        if literal.isascii() and literal.isdigit():
            value = int(literal)
            if INT64_MIN <= value <= INT64_MAX:
                return IntegerLiteral(tok, value)
        self.diagnostics.record(f'could not parse "{literal}" as integer')
        return None

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TRUE))

    def parse_prefix_expression(self) -> Expression | None:
        tok = self.cur_token
        self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok, tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        # The operator's own precedence, not one more: equal-precedence chains nest left-deep
        precedence = self.cur_precedence()
        self.advance()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, tok.literal, left, right)

    def parse_assign_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        self.advance()
        # LOWEST keeps a = b = c right-associative
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if not isinstance(left, (Identifier, IndexExpression, MemberExpression)):
            self.diagnostics.record(f"invalid assignment target {left.render()}")
            return None
        return AssignExpression(tok, left, value)

    def parse_grouped_expression(self) -> Expression | None:
        self.advance()
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None or not self.expect_peek(RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> Expression | None:
        tok = self.cur_token
        if not self.expect_peek(LPAREN):
            return None
        self.advance()

        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self.expect_peek(RPAREN):
            return None
        if not self.expect_peek(LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(ELSE):
            self.advance()
            if not self.expect_peek(LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(tok, condition, consequence, alternative)

    def parse_for_expression(self) -> Expression | None:
        tok = self.cur_token
        if not self.expect_peek(LPAREN):
            return None
        self.advance()

        # An empty init would be taken for an empty statement and dropped silently
        if self.cur_token_is(SEMICOLON):
            self.no_prefix_parse_fn_error(SEMICOLON)
            return None
        init = self.parse_statement()
        if init is None:
            return None
        if not self.cur_token_is(SEMICOLON) and not self.expect_peek(SEMICOLON):
            return None
        self.advance()

        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self.expect_peek(SEMICOLON):
            return None
        self.advance()

        update = self.parse_expression(Precedence.LOWEST)
        if update is None or not self.expect_peek(RPAREN):
            return None
        if not self.expect_peek(LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return ForExpression(tok, init, condition, update, body)

    def parse_function_literal(self) -> Expression | None:
        tok = self.cur_token
        if not self.expect_peek(LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(tok, parameters, body)

    def parse_function_parameters(self) -> list[Identifier] | None:
        identifiers: list[Identifier] = []
        if self.peek_token_is(RPAREN):
            self.advance()
            return identifiers

        if not self.expect_peek(IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(COMMA):
            self.advance()
            if not self.expect_peek(IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(RPAREN):
            return None
        return identifiers

    def parse_expression_list(self, end: str) -> list[Expression] | None:
        """Parses comma-separated expressions up to and including the `end` token."""
        items: list[Expression] = []
        if self.peek_token_is(end):
            self.advance()
            return items

        self.advance()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self.peek_token_is(COMMA):
            self.advance()
            self.advance()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None
        return items

    def parse_call_expression(self, function: Expression) -> Expression | None:
        tok = self.cur_token
        arguments = self.parse_expression_list(RPAREN)
        if arguments is None:
            return None
        return CallExpression(tok, function, arguments)

    def parse_array_literal(self) -> Expression | None:
        tok = self.cur_token
        elements = self.parse_expression_list(RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(tok, elements)

    def parse_index_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        self.advance()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self.expect_peek(RBRACKET):
            return None
        return IndexExpression(tok, left, index)

    def parse_member_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        if not self.expect_peek(IDENT):
            return None
        prop = Identifier(self.cur_token, self.cur_token.literal)
        return MemberExpression(tok, left, prop)

    def parse_hash_literal(self) -> Expression | None:
        tok = self.cur_token
        pairs: list[tuple[Expression, Expression]] = []

        while not self.peek_token_is(RBRACE):
            self.advance()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None or not self.expect_peek(COLON):
                return None
            self.advance()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))

            if not self.peek_token_is(RBRACE) and not self.expect_peek(COMMA):
                return None

        self.advance()
        return HashLiteral(tok, pairs)


def parse(source: str) -> ParseResult:
    """Tokenizes and parses `source` in one step."""
    return Parser(Lexer(CharacterStream(source))).parse_program()


__all__ = [
    "Diagnostics",
    "ParseError",
    "ParseResult",
    "Parser",
    "Precedence",
    "parse",
    "precedence_of",
    "precedences",
]
