import pytest

from calcir.lexer import Lexer
from calcir.nodes import BinaryOp, Factor, Operator, ValueKind, WithDecl
from calcir.parser import CalcSyntaxError, Parser, parse


def num(text):
    return Factor(ValueKind.NUMBER, text)


def ident(text):
    return Factor(ValueKind.IDENT, text)


def test_single_number():
    assert parse("42") == num("42")


def test_single_identifier_without_declaration():
    assert parse("x") == ident("x")


def test_multiplication_binds_tighter_than_addition():
    assert parse("1+2*3") == BinaryOp(
        Operator.PLUS, num("1"), BinaryOp(Operator.MUL, num("2"), num("3"))
    )


def test_subtraction_is_left_associative():
    assert parse("8-4-2") == BinaryOp(
        Operator.MINUS, BinaryOp(Operator.MINUS, num("8"), num("4")), num("2")
    )


def test_division_is_left_associative():
    assert parse("8/4/2") == BinaryOp(
        Operator.DIV, BinaryOp(Operator.DIV, num("8"), num("4")), num("2")
    )


def test_parentheses_group():
    assert parse("(1+2)*3") == BinaryOp(
        Operator.MUL, BinaryOp(Operator.PLUS, num("1"), num("2")), num("3")
    )


def test_nested_parentheses():
    assert parse("((a))") == ident("a")


def test_with_declaration():
    assert parse("with a, b: a*(4+b)") == WithDecl(
        ("a", "b"),
        BinaryOp(Operator.MUL, ident("a"), BinaryOp(Operator.PLUS, num("4"), ident("b"))),
    )


def test_with_single_variable():
    tree = parse("with x: x")
    assert tree == WithDecl(("x",), ident("x"))
    assert list(tree) == ["x"]


def test_parser_class_matches_function():
    text = "with a: a - 3 / a"
    assert Parser(Lexer(text)).parse() == parse(text)


def test_stray_tokens_after_factor_are_skipped():
    assert parse("1 x") == num("1")
    assert parse("1 $ 2") == num("1")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "+",
        "1 +",
        "(1",
        "1 )",
        "with : x",
        "with a b: a",
        "with a, : a",
        "with a",
        "*2",
        "é",
    ],
)
def test_syntax_errors(text):
    with pytest.raises(CalcSyntaxError):
        parse(text)


def test_error_messages_name_unexpected_token():
    with pytest.raises(CalcSyntaxError) as info:
        parse("with 5: x")
    assert info.value.messages
    assert info.value.messages[0] == "Unexpected: 5"
    assert all(message.startswith("Unexpected: ") for message in info.value.messages)


def test_error_is_value_error_with_messages_in_text():
    with pytest.raises(ValueError) as info:
        parse("1 )")
    assert "Unexpected: )" in str(info.value)
    assert info.value.messages == ("Unexpected: )",)


def test_error_recovery_collects_every_error():
    with pytest.raises(CalcSyntaxError) as info:
        parse("* + /")
    assert len(info.value.messages) > 1