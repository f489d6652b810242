"""
Tests for translation of typed expressions to Z3 terms and SMT-LIB text.
"""
import z3

from act.claims import Sort, StorageRef, ParamRef
from act.claims.expr import Lit, apply_op, lit, negate
from act.translator import (
    ExprToSMT2Translator,
    ExprToZ3Translator,
    TypeTranslator,
    generate_query_smt2,
)
from act.verification import build_queries

x = StorageRef("x", Sort.INTEGER)
n = ParamRef("n", Sort.INTEGER)
s = StorageRef("s", Sort.BYTES)


def test_type_translator_sorts():
    types = TypeTranslator()

    assert types.z3_sort(Sort.INTEGER) == z3.IntSort()
    assert types.z3_sort(Sort.BOOLEAN) == z3.BoolSort()
    assert types.z3_sort(Sort.BYTES) == z3.StringSort()
    assert types.smt2_sort(Sort.BYTES) == "String"


def test_type_translator_declare():
    var = TypeTranslator().declare("x", Sort.INTEGER)

    assert isinstance(var, z3.ArithRef)
    assert str(var) == "x"


def test_z3_translation_is_equivalent():
    translator = ExprToZ3Translator()
    consts = translator.declare_all([])
    consts["x"] = z3.Int("x")
    consts["n"] = z3.Int("n")
    expr = apply_op("==", (apply_op("%", (apply_op("+", (x, n)), lit(3))), lit(1)))

    term = translator.translate(expr, consts)

    solver = z3.Solver()
    solver.add(term, consts["x"] == 4, consts["n"] == 0)
    assert solver.check() == z3.sat
    solver = z3.Solver()
    solver.add(term, consts["x"] == 3, consts["n"] == 0)
    assert solver.check() == z3.unsat


def test_z3_integer_division_truncates():
    translator = ExprToZ3Translator()
    term = translator.translate(apply_op("/", (lit(7), lit(2))), {})

    assert z3.simplify(term).as_long() == 3


def test_smt2_operators():
    translator = ExprToSMT2Translator()

    assert translator.translate(apply_op("/", (x, n))) == "(div |x| |n|)"
    assert translator.translate(apply_op("%", (x, n))) == "(mod |x| |n|)"
    assert translator.translate(apply_op("!=", (x, n))) == "(distinct |x| |n|)"
    assert translator.translate(apply_op("neg", (x,))) == "(- |x|)"
    assert translator.translate(negate(apply_op("==", (x, n)))) == "(not (= |x| |n|))"


def test_smt2_literals():
    translator = ExprToSMT2Translator()

    assert translator.translate(Lit(-7, Sort.INTEGER)) == "(- 7)"
    assert translator.translate(lit(True)) == "true"
    assert translator.translate(apply_op("==", (s, lit('a"b')))) == '(= |s| "a""b")'


def test_generate_query_smt2(counter_claims):
    j = build_queries(counter_claims)[3]

    text = generate_query_smt2(j, timeout_ms=20000)
    lines = text.splitlines()

    assert lines[0] == "; C: behaviour j, case x == 7"
    assert "(set-option :timeout 20000)" in lines
    assert lines.index("(set-option :produce-models true)") < lines.index("(set-logic ALL)")
    assert "(declare-const |x| Int)" in lines
    assert "(assert (not (< 100 9)))" in lines
    assert lines[-2:] == ["(check-sat)", "(get-value (|x|))"]


def test_generate_query_smt2_without_timeout(counter_claims):
    base = build_queries(counter_claims)[0]

    text = generate_query_smt2(base, reason_unknown=True)

    assert ":timeout" not in text
    assert "get-value" not in text
    assert text.rstrip().endswith("(get-info :reason-unknown)")
