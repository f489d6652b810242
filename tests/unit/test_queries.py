"""
Tests for proof query building.
"""
from act.claims import Sort, StorageRef, ParamRef
from act.claims.expr import Lit, apply_op, negate
from act.verification import Symbol, build_queries


def int_lit(v):
    return Lit(v, Sort.INTEGER)


X = StorageRef("x", Sort.INTEGER)
X_RANGE = apply_op("and", (
    apply_op("<=", (int_lit(0), X)),
    apply_op("<=", (X, int_lit(2 ** 256 - 1))),
))


def test_counter_query_order(counter_claims):
    queries = build_queries(counter_claims)

    assert [q.label for q in queries] == [
        "constructor init",
        "behaviour f, case x == 0",
        "behaviour g, case x == 1",
        "behaviour j, case x == 7",
    ]
    assert [q.behaviour for q in queries] == [None, "f", "g", "j"]
    assert {q.invariant_key for q in queries} == {("C", 0)}


def test_base_case_binds_constructor_values(counter_claims):
    base = build_queries(counter_claims)[0]

    assert base.symbols == ()
    assert base.assertions == (negate(apply_op("<", (int_lit(0), int_lit(9)))),)


def test_step_case(counter_claims):
    j = build_queries(counter_claims)[3]

    assert j.symbols == (Symbol("x", Sort.INTEGER),)
    assert j.assertions == (
        X_RANGE,
        apply_op("<", (X, int_lit(9))),
        apply_op("==", (X, int_lit(7))),
        negate(apply_op("<", (int_lit(100), int_lit(9)))),
    )


def test_queries_are_deterministic(token_claims):
    assert build_queries(token_claims) == build_queries(token_claims)


def test_token_queries(token_claims):
    queries = build_queries(token_claims)

    # 2 invariants x (base + 2 burn cases + 1 pause case)
    assert len(queries) == 8
    assert [q.invariant_index for q in queries] == [0] * 4 + [1] * 4
    assert [q.label for q in queries[:4]] == [
        "constructor init",
        "behaviour burn, case amount <= balance",
        "behaviour burn, case amount > balance",
        "behaviour pause",
    ]


def test_step_case_declares_storage_params_then_environment(token_claims):
    burn = build_queries(token_claims)[1]

    assert [s.name for s in burn.symbols] == [
        "supply", "balance", "paused", "symbol", "amount", "CALLVALUE"]
    assert burn.symbols[2].sort == Sort.BOOLEAN
    assert burn.symbols[3].sort == Sort.BYTES


def test_step_case_post_state_substitution(token_claims):
    burn = build_queries(token_claims)[1]
    balance = StorageRef("balance", Sort.INTEGER)
    supply = StorageRef("supply", Sort.INTEGER)
    amount = ParamRef("amount", Sort.INTEGER)

    post = apply_op("<=", (apply_op("-", (balance, amount)), supply))
    assert burn.assertions[-1] == negate(post)


def test_step_case_assumes_ranges_of_bounded_symbols(token_claims):
    burn = build_queries(token_claims)[1]

    # supply, balance, amount and CALLVALUE are bounded; paused and symbol are not
    ranges = burn.assertions[:4]
    assert all(r.op == "and" for r in ranges)
    assert burn.assertions[4] == apply_op(
        "<=", (StorageRef("balance", Sort.INTEGER), StorageRef("supply", Sort.INTEGER)))


def test_base_case_asserts_constructor_preconditions(token_claims):
    base = build_queries(token_claims)[0]

    assert [s.name for s in base.symbols] == ["CALLVALUE"]
    assert len(base.assertions) == 3
