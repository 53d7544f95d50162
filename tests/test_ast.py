import json

from monkey.monkey_ast import (
    BlockStatement,
    ExpressionStatement,
    HashLiteral,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)
from monkey.monkey_lexer import Token


def ident(name: str) -> Identifier:
    return Identifier(Token("IDENT", name), name)


def integer(value: int) -> IntegerLiteral:
    return IntegerLiteral(Token("INT", str(value)), value)


def test_program_render() -> None:
    program = Program(
        [
            LetStatement(Token("LET", "let"), ident("myVar"), ident("anotherVar")),
        ]
    )
    assert program.render() == "let myVar = anotherVar;"
    assert str(program) == "let myVar = anotherVar;"


def test_return_statement_render() -> None:
    stmt = ReturnStatement(Token("RETURN", "return"), integer(5))
    assert stmt.render() == "return 5;"
    assert stmt.token_literal() == "return"


def test_prefix_and_infix_render_parenthesized() -> None:
    neg = PrefixExpression(Token("MINUS", "-"), "-", ident("a"))
    expr = InfixExpression(Token("ASTERISK", "*"), "*", neg, ident("b"))
    assert neg.render() == "(-a)"
    assert expr.render() == "((-a) * b)"


def test_expression_statement_uses_first_token() -> None:
    expr = InfixExpression(Token("PLUS", "+"), "+", integer(1), integer(2))
    stmt = ExpressionStatement(Token("INT", "1"), expr)
    assert stmt.token_literal() == "1"
    assert stmt.render() == "(1 + 2)"


def test_block_render() -> None:
    lbrace = Token("LBRACE", "{")
    assert BlockStatement(lbrace, []).render() == "{ }"
    block = BlockStatement(
        lbrace,
        [
            ExpressionStatement(Token("IDENT", "x"), ident("x")),
            ReturnStatement(Token("RETURN", "return"), ident("y")),
        ],
    )
    assert block.render() == "{ x; return y; }"


def test_hash_render_keeps_order() -> None:
    pairs = [
        (StringLiteral(Token("STRING", "b"), "b"), integer(2)),
        (StringLiteral(Token("STRING", "a"), "a"), integer(1)),
    ]
    assert HashLiteral(Token("LBRACE", "{"), pairs).render() == '{"b": 2, "a": 1}'


def test_empty_program_token_literal() -> None:
    assert Program().token_literal() == ""
    assert Program().render() == ""


def test_nodes_compare_structurally() -> None:
    assert ident("x") == ident("x")
    assert ident("x") != ident("y")
    assert Program([ExpressionStatement(Token("IDENT", "x"), ident("x"))]) == Program(
        [ExpressionStatement(Token("IDENT", "x"), ident("x"))]
    )


def test_to_dict_nested() -> None:
    stmt = LetStatement(
        Token("LET", "let"),
        ident("x"),
        InfixExpression(Token("PLUS", "+"), "+", integer(1), integer(2)),
    )
    d = stmt.to_dict()
    assert d["kind"] == "LetStatement"
    assert d["literal"] == "let"
    assert d["name"] == {"kind": "Identifier", "literal": "x", "name": "x"}
    assert d["value"]["kind"] == "InfixExpression"
    assert d["value"]["left"]["value"] == 1
    assert "token" not in d


def test_to_dict_serializes_pairs_and_program() -> None:
    pairs = [(StringLiteral(Token("STRING", "k"), "k"), integer(1))]
    hash_lit = HashLiteral(Token("LBRACE", "{"), pairs)
    program = Program([ExpressionStatement(Token("LBRACE", "{"), hash_lit)])
    d = program.to_dict()
    assert d["kind"] == "Program"
    pair = d["statements"][0]["value"]["pairs"][0]
    assert pair[0]["value"] == "k"
    assert pair[1]["value"] == 1
    json.dumps(d)


def test_repr_mentions_variant() -> None:
    assert repr(ident("x")).startswith("Identifier(")
    assert repr(Program([])) == "Program([])"
