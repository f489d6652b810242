"""
Tests for the type checker.
"""
import pytest

from act.claims import Sort, StorageRef, ParamRef, EnvRef, Lit, typecheck
from act.claims.expr import TRUE, apply_op
from act.errors import (
    DuplicateDeclaration,
    InvariantReferencesCalldata,
    LiteralOutOfRange,
    MalformedBehaviour,
    NonLiteralInitializer,
    NotBoolean,
    Pos,
    SortMismatch,
    TypeCheckError,
    UndeclaredStorageSlot,
    UnknownContract,
    UnknownType,
)
from act.syntax import parse


HEADER = """\
behaviour init of C
interface constructor(uint256 seed)

creates
  uint256 x := 0
  bool flag := false

invariants
  x < 9
"""


def check(extra=""):
    return typecheck(parse(HEADER + extra))


def test_counter_contract(counter_claims):
    (contract,) = counter_claims.contracts
    x = StorageRef("x", Sort.INTEGER)

    assert contract.name == "C"
    assert [s.name for s in contract.storage] == ["x"]
    assert contract.storage[0].abi_type.bounds == (0, 2 ** 256 - 1)
    assert contract.constructor.initial_values() == {"x": Lit(0, Sort.INTEGER)}
    assert [b.name for b in contract.behaviours] == ["f", "g", "j"]

    (inv,) = contract.invariants
    assert inv.expr == apply_op("<", (x, Lit(9, Sort.INTEGER)))

    (case,) = contract.behaviours[2].cases
    assert case.precondition == apply_op("==", (x, Lit(7, Sort.INTEGER)))
    assert case.updated() == {"x": Lit(100, Sort.INTEGER)}


def test_every_subexpression_is_sorted(token_claims):
    burn = token_claims.contract("Token").behaviours[0]
    (case, _) = burn.cases
    (update,) = case.updates
    assert update.value.sort == Sort.INTEGER
    assert update.value.args == (
        StorageRef("balance", Sort.INTEGER), ParamRef("amount", Sort.INTEGER))
    assert burn.iff[0].args[0] == EnvRef("CALLVALUE", Sort.INTEGER)
    assert case.returns == Lit(True, Sort.BOOLEAN)


def test_unguarded_behaviour_gets_one_true_case(token_claims):
    pause = token_claims.contract("Token").behaviours[1]
    (case,) = pause.cases
    assert case.precondition == TRUE
    assert not case.is_guarded


def test_behaviour_without_storage_still_has_a_case():
    claims = check("\nbehaviour noop of C\ninterface noop()\n")
    (case,) = claims.contract("C").behaviours[0].cases
    assert case.updates == ()


def test_boolean_assigned_to_integer_slot():
    with pytest.raises(SortMismatch) as exc_info:
        check(
            "\nbehaviour f of C\n"
            "interface f()\n"
            "\n"
            "storage\n"
            "  x => true\n"
        )
    err = exc_info.value
    assert err.pos == Pos(15, 3)
    assert err.expected == Sort.INTEGER
    assert err.actual == Sort.BOOLEAN


def test_operand_sort_mismatch():
    with pytest.raises(SortMismatch) as exc_info:
        check(
            "\nbehaviour f of C\n"
            "interface f()\n"
            "\n"
            "storage\n"
            "  x => x + flag\n"
        )
    assert exc_info.value.pos == Pos(15, 12)


def test_precondition_must_be_boolean():
    with pytest.raises(NotBoolean) as exc_info:
        check(
            "\nbehaviour f of C\n"
            "interface f()\n"
            "\n"
            "case x + 1:\n"
            "\n"
            "storage\n"
            "  x => 1\n"
        )
    assert exc_info.value.pos == Pos(14, 8)


def test_invariant_must_be_boolean():
    with pytest.raises(NotBoolean):
        typecheck(parse(HEADER.replace("x < 9", "x + 9")))


def test_invariant_references_parameter():
    with pytest.raises(InvariantReferencesCalldata) as exc_info:
        typecheck(parse(HEADER.replace("x < 9", "x < seed")))
    assert exc_info.value.name == "seed"
    assert exc_info.value.pos == Pos(9, 7)


def test_invariant_references_behaviour_parameter():
    source = HEADER.replace("x < 9", "x < amount") + (
        "\nbehaviour f of C\n"
        "interface f(uint256 amount)\n"
        "\n"
        "storage\n"
        "  x => amount\n"
    )
    with pytest.raises(InvariantReferencesCalldata):
        typecheck(parse(source))


def test_invariant_may_reference_environment():
    claims = typecheck(parse(HEADER.replace("x < 9", "x < TIMESTAMP or CALLER == 0")))
    (inv,) = claims.invariants
    assert inv.expr.sort == Sort.BOOLEAN


def test_undeclared_storage_slot_in_update():
    with pytest.raises(UndeclaredStorageSlot) as exc_info:
        check(
            "\nbehaviour f of C\n"
            "interface f()\n"
            "\n"
            "storage\n"
            "  y => 1\n"
        )
    assert exc_info.value.name == "y"
    assert exc_info.value.pos == Pos(15, 3)


def test_undeclared_name_in_invariant():
    with pytest.raises(UndeclaredStorageSlot):
        typecheck(parse(HEADER.replace("x < 9", "y < 9")))


def test_behaviour_for_unknown_contract():
    with pytest.raises(UnknownContract):
        check("\nbehaviour f of D\ninterface f()\n")


def test_duplicate_update():
    with pytest.raises(DuplicateDeclaration):
        check(
            "\nbehaviour f of C\n"
            "interface f()\n"
            "\n"
            "storage\n"
            "  x => 1\n"
            "  x => 2\n"
        )


def test_parameter_shadowing_storage():
    with pytest.raises(DuplicateDeclaration):
        check("\nbehaviour f of C\ninterface f(uint256 x)\n")


def test_unknown_type():
    with pytest.raises(UnknownType):
        typecheck(parse(HEADER.replace("uint256 x", "uint7 x")))


def test_initializer_must_be_literal():
    with pytest.raises(NonLiteralInitializer):
        typecheck(parse(HEADER.replace("uint256 x := 0", "uint256 x := 1 + 1")))


def test_negative_initializer_is_a_literal():
    claims = typecheck(parse(HEADER.replace("uint256 x := 0", "int256 x := -3")))
    assert claims.contract("C").constructor.initial_values()["x"] == Lit(-3, Sort.INTEGER)


def test_initializer_sort_must_match_slot():
    with pytest.raises(SortMismatch):
        typecheck(parse(HEADER.replace("bool flag := false", "bool flag := 1")))


def test_constructor_cannot_have_cases():
    with pytest.raises(MalformedBehaviour):
        typecheck(parse(HEADER + "\ncase true:\n\nstorage\n  x => 1\n"))


def test_only_constructor_creates():
    with pytest.raises(MalformedBehaviour):
        check("\nbehaviour f of C\ninterface f()\n\ncreates\n  uint256 y := 1\n")


def test_errors_share_a_base_class():
    assert issubclass(SortMismatch, TypeCheckError)
    assert issubclass(UndeclaredStorageSlot, TypeCheckError)


BAD_UPDATE = (
    "\nbehaviour f of C\n"
    "interface f()\n"
    "\n"
    "storage\n"
    "  x => true\n"
)

UNKNOWN_CONTRACT = "\nbehaviour g of D\ninterface g()\n"


def test_invariant_error_comes_before_behaviour_errors():
    source = HEADER.replace("x < 9", "x < nope") + BAD_UPDATE + UNKNOWN_CONTRACT
    with pytest.raises(UndeclaredStorageSlot) as exc_info:
        typecheck(parse(source))
    assert exc_info.value.name == "nope"
    assert exc_info.value.pos == Pos(9, 7)


def test_behaviours_are_checked_in_source_order():
    with pytest.raises(SortMismatch) as exc_info:
        check(BAD_UPDATE + UNKNOWN_CONTRACT)
    assert exc_info.value.pos == Pos(15, 3)

    with pytest.raises(UnknownContract) as exc_info:
        check(UNKNOWN_CONTRACT + BAD_UPDATE)
    assert exc_info.value.pos == Pos(11, 1)


def test_initializer_above_range():
    with pytest.raises(LiteralOutOfRange) as exc_info:
        typecheck(parse(HEADER.replace("uint256 x := 0", "uint8 x := 300")))
    err = exc_info.value
    assert err.name == "x"
    assert err.value == 300
    assert err.pos == Pos(5, 14)


def test_negative_initializer_for_unsigned_slot():
    with pytest.raises(LiteralOutOfRange):
        typecheck(parse(HEADER.replace("uint256 x := 0", "uint256 x := -1")))


def test_initializer_at_range_bounds():
    claims = typecheck(parse(HEADER.replace("uint256 x := 0", "int8 x := -128")))
    assert claims.contract("C").constructor.initial_values()["x"] == Lit(-128, Sort.INTEGER)
    typecheck(parse(HEADER.replace("uint256 x := 0", "uint8 x := 255").replace("x < 9", "x <= 255")))
