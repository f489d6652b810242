"""
Tests for the act parser.
"""
import pytest

from act.errors import ParseError, Pos
from act.syntax import nodes, parse


def test_parse_counter(counter_source):
    spec = parse(counter_source)

    assert [b.name for b in spec.behaviours] == ["init", "f", "g", "j"]
    init = spec.behaviours[0]
    assert init.is_constructor
    assert init.creates == (nodes.Creation("uint256", "x", nodes.IntLit(0)),)
    assert init.invariants == (nodes.BinOp("<", nodes.Var("x"), nodes.IntLit(9)),)
    assert init.cases == ()


def test_parse_guarded_case(counter_source):
    f = parse(counter_source).behaviours[1]

    assert not f.is_constructor
    assert f.creates is None
    (case,) = f.cases
    assert case.condition == nodes.BinOp("==", nodes.Var("x"), nodes.IntLit(0))
    assert case.updates == (nodes.Update("x", nodes.IntLit(1)),)
    assert case.returns is None


def test_parse_token(token_source):
    init, burn, pause = parse(token_source).behaviours

    assert init.interface.params == (nodes.Decl("uint256", "_supply"),)
    assert len(init.iffs) == 1
    assert [c.name for c in init.creates] == ["supply", "balance", "paused", "symbol"]
    assert init.creates[3].value == nodes.StrLit("TOK")

    assert burn.iffs[1] == nodes.UnOp("not", nodes.Var("paused"))
    assert len(burn.cases) == 2
    assert burn.cases[0].returns == nodes.BoolLit(True)
    assert burn.cases[1].updates == ()
    assert burn.cases[1].returns == nodes.BoolLit(False)

    (case,) = pause.cases
    assert case.condition is None
    assert case.updates == (nodes.Update("paused", nodes.BoolLit(True)),)


def test_precedence():
    spec = parse(
        "behaviour init of C\n"
        "interface constructor()\n"
        "creates\n"
        "  uint256 x := 0\n"
        "invariants\n"
        "  not x + 1 * 2 < 3 and true or false\n"
    )
    (inv,) = spec.behaviours[0].invariants
    x = nodes.Var("x")
    product = nodes.BinOp("*", nodes.IntLit(1), nodes.IntLit(2))
    comparison = nodes.BinOp("<", nodes.BinOp("+", x, product), nodes.IntLit(3))
    assert inv == nodes.BinOp(
        "or",
        nodes.BinOp("and", nodes.UnOp("not", comparison), nodes.BoolLit(True)),
        nodes.BoolLit(False),
    )


def test_parenthesised_expression_spans_lines():
    spec = parse(
        "behaviour init of C\n"
        "interface constructor()\n"
        "creates\n"
        "  uint256 x := 0\n"
        "invariants\n"
        "  (x <\n"
        "     9)\n"
    )
    assert spec.behaviours[0].invariants == (
        nodes.BinOp("<", nodes.Var("x"), nodes.IntLit(9)),)


def test_binop_position_is_operator_position():
    spec = parse(
        "behaviour init of C\n"
        "interface constructor()\n"
        "creates\n"
        "  uint256 x := 0\n"
        "invariants\n"
        "  x < 9\n"
    )
    assert spec.behaviours[0].invariants[0].pos == Pos(6, 5)


def test_missing_of_is_an_error():
    with pytest.raises(ParseError) as exc_info:
        parse("behaviour f C\ninterface f()\n")
    assert exc_info.value.pos == Pos(1, 13)


def test_empty_invariants_block_is_an_error():
    with pytest.raises(ParseError):
        parse(
            "behaviour init of C\n"
            "interface constructor()\n"
            "creates\n"
            "  uint256 x := 0\n"
            "invariants\n"
        )


def test_trailing_tokens_are_an_error():
    with pytest.raises(ParseError):
        parse(
            "behaviour f of C\n"
            "interface f()\n"
            "storage\n"
            "  x => 1\n"
            "creates\n"
        )
