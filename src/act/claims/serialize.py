"""
JSON form of typed claims.

claims_to_json emits the document printed by `act type`. claims_from_json
reads such a document back into an untyped Spec, which type checks to the
same claims it was produced from.
"""
import json
from typing import Any, Dict, List

from ..syntax import nodes
from .expr import Apply, EnvRef, Expr, Lit, ParamRef, StorageRef
from .model import Behaviour, Case, Claims, Constructor, Contract, Interface


def expr_to_json(expr: Expr) -> Dict[str, Any]:
    if isinstance(expr, Lit):
        return {"kind": "literal", "value": expr.value, "sort": str(expr.sort)}
    if isinstance(expr, StorageRef):
        return {"kind": "storage", "name": expr.name, "sort": str(expr.sort)}
    if isinstance(expr, ParamRef):
        return {"kind": "param", "name": expr.name, "sort": str(expr.sort)}
    if isinstance(expr, EnvRef):
        return {"kind": "env", "name": expr.name, "sort": str(expr.sort)}
    if isinstance(expr, Apply):
        return {
            "kind": "op",
            "op": expr.op,
            "args": [expr_to_json(a) for a in expr.args],
            "sort": str(expr.sort),
        }
    raise TypeError(f"Expected typed expression, got {type(expr)}")


def _interface_to_json(iface: Interface) -> Dict[str, Any]:
    return {
        "name": iface.name,
        "params": [{"name": p.name, "type": p.abi_type.name} for p in iface.params],
    }


def _constructor_to_json(ctor: Constructor) -> Dict[str, Any]:
    return {
        "name": ctor.name,
        "interface": _interface_to_json(ctor.interface),
        "iff": [expr_to_json(e) for e in ctor.iff],
        "initial": [{"slot": slot, "value": expr_to_json(v)} for slot, v in ctor.initial],
    }


def _case_to_json(case: Case) -> Dict[str, Any]:
    return {
        "precondition": expr_to_json(case.precondition),
        "updates": [{"slot": u.slot, "value": expr_to_json(u.value)} for u in case.updates],
        "returns": None if case.returns is None else expr_to_json(case.returns),
    }


def _behaviour_to_json(behv: Behaviour) -> Dict[str, Any]:
    return {
        "name": behv.name,
        "contract": behv.contract,
        "interface": _interface_to_json(behv.interface),
        "iff": [expr_to_json(e) for e in behv.iff],
        "cases": [_case_to_json(c) for c in behv.cases],
    }


def _contract_to_json(contract: Contract) -> Dict[str, Any]:
    return {
        "name": contract.name,
        "storage": [
            {"name": s.name, "type": s.abi_type.name, "sort": str(s.sort)}
            for s in contract.storage
        ],
        "constructor": _constructor_to_json(contract.constructor),
        "behaviours": [_behaviour_to_json(b) for b in contract.behaviours],
        "invariants": [expr_to_json(i.expr) for i in contract.invariants],
    }


def claims_to_json(claims: Claims) -> Dict[str, Any]:
    """Convert typed claims to a JSON-compatible dict."""
    return {"contracts": [_contract_to_json(c) for c in claims.contracts]}


def dumps(claims: Claims, indent: int = 2) -> str:
    return json.dumps(claims_to_json(claims), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Reading back
# ---------------------------------------------------------------------------

def expr_from_json(doc: Dict[str, Any]) -> nodes.Expr:
    kind = doc["kind"]
    if kind == "literal":
        value = doc["value"]
        if isinstance(value, bool):
            return nodes.BoolLit(value)
        if isinstance(value, int):
            return nodes.IntLit(value)
        return nodes.StrLit(value)
    if kind in ("storage", "param", "env"):
        return nodes.Var(doc["name"])
    if kind == "op":
        args = [expr_from_json(a) for a in doc["args"]]
        if doc["op"] == "neg":
            return nodes.UnOp("-", args[0])
        if doc["op"] == "not":
            return nodes.UnOp("not", args[0])
        return nodes.BinOp(doc["op"], args[0], args[1])
    raise ValueError(f"Unknown expression kind: {kind!r}")


def _interface_from_json(doc: Dict[str, Any]) -> nodes.Interface:
    return nodes.Interface(
        name=doc["name"],
        params=tuple(nodes.Decl(p["type"], p["name"]) for p in doc["params"]),
    )


def _constructor_from_json(contract: Dict[str, Any]) -> nodes.Behaviour:
    ctor = contract["constructor"]
    types = {s["name"]: s["type"] for s in contract["storage"]}
    creates = tuple(
        nodes.Creation(types[entry["slot"]], entry["slot"], expr_from_json(entry["value"]))
        for entry in ctor["initial"]
    )
    return nodes.Behaviour(
        name=ctor["name"],
        contract=contract["name"],
        interface=_interface_from_json(ctor["interface"]),
        iffs=tuple(expr_from_json(e) for e in ctor["iff"]),
        creates=creates,
        invariants=tuple(expr_from_json(e) for e in contract["invariants"]),
    )


def _behaviour_from_json(doc: Dict[str, Any]) -> nodes.Behaviour:
    cases = tuple(
        nodes.CaseBlock(
            condition=expr_from_json(c["precondition"]),
            updates=tuple(
                nodes.Update(u["slot"], expr_from_json(u["value"])) for u in c["updates"]
            ),
            returns=None if c["returns"] is None else expr_from_json(c["returns"]),
        )
        for c in doc["cases"]
    )
    return nodes.Behaviour(
        name=doc["name"],
        contract=doc["contract"],
        interface=_interface_from_json(doc["interface"]),
        iffs=tuple(expr_from_json(e) for e in doc["iff"]),
        cases=cases,
    )


def claims_from_json(doc: Dict[str, Any]) -> nodes.Spec:
    """Rebuild an untyped Spec from the output of claims_to_json."""
    behaviours: List[nodes.Behaviour] = []
    for contract in doc["contracts"]:
        behaviours.append(_constructor_from_json(contract))
        behaviours.extend(_behaviour_from_json(b) for b in contract["behaviours"])
    return nodes.Spec(tuple(behaviours))


def loads(text: str) -> nodes.Spec:
    return claims_from_json(json.loads(text))
