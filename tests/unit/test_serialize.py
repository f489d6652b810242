"""
Tests for the JSON form of typed claims.
"""
import json

from act.claims import claims_to_json, dumps, loads, typecheck
from act.syntax import parse


def test_round_trip_is_idempotent(counter_claims, token_claims):
    for claims in (counter_claims, token_claims):
        again = typecheck(loads(dumps(claims)))
        assert again == claims
        assert dumps(again) == dumps(claims)


def test_round_trip_keeps_negation_and_unary_minus():
    source = (
        "behaviour init of C\n"
        "interface constructor()\n"
        "creates\n"
        "  int256 x := -5\n"
        "  bool on := true\n"
        "invariants\n"
        "  not (-x < 0 and on)\n"
    )
    claims = typecheck(parse(source))
    assert typecheck(loads(dumps(claims))) == claims


def test_document_shape(counter_claims):
    doc = claims_to_json(counter_claims)
    (contract,) = doc["contracts"]

    assert contract["name"] == "C"
    assert contract["storage"] == [{"name": "x", "type": "uint256", "sort": "int"}]
    assert contract["constructor"]["initial"] == [
        {"slot": "x", "value": {"kind": "literal", "value": 0, "sort": "int"}}]
    assert [b["name"] for b in contract["behaviours"]] == ["f", "g", "j"]
    assert contract["invariants"] == [{
        "kind": "op",
        "op": "<",
        "args": [
            {"kind": "storage", "name": "x", "sort": "int"},
            {"kind": "literal", "value": 9, "sort": "int"},
        ],
        "sort": "bool",
    }]


def test_dumps_is_valid_json(token_claims):
    doc = json.loads(dumps(token_claims))
    burn = doc["contracts"][0]["behaviours"][0]
    assert burn["interface"] == {"name": "burn", "params": [{"name": "amount", "type": "uint256"}]}
    assert burn["cases"][1]["returns"] == {"kind": "literal", "value": False, "sort": "bool"}
