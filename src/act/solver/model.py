"""Parsing of SMT-LIB `get-value` answers into counterexample models."""

from __future__ import annotations

import re
from typing import Any, Dict

_GET_VALUE_RE = re.compile(
    r"\(\(\s*(?P<term>\|[^|]*\||[^\s()]+)\s+"
    r"(?P<val>\(\s*-\s*\d+\s*\)|\"(?:[^\"]|\"\")*\"|[^\s()]+)\s*\)\)"
)
_NEGATIVE_RE = re.compile(r"\(\s*-\s*(\d+)\s*\)")


def parse_value(text: str) -> Any:
    """Convert one SMT-LIB value to a Python value.

    Integers (including `(- n)`), booleans and string literals are
    converted; anything else is returned as text.
    """
    text = text.strip()
    if text == "true":
        return True
    if text == "false":
        return False
    m = _NEGATIVE_RE.fullmatch(text)
    if m:
        return -int(m.group(1))
    if re.fullmatch(r"-?\d+", text):
        return int(text)
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1].replace('""', '"')
    return text


def parse_get_value_output(stdout: str) -> Dict[str, Any]:
    """Best-effort parse of SMT-LIB `(get-value ...)` output.

    We support the common case where solvers print one answer per line:
        ((|x| 7))
        ((y (- 3)))

    Quoted symbols are returned without their bars.
    """
    out: Dict[str, Any] = {}
    for m in _GET_VALUE_RE.finditer(stdout):
        term = m.group("term")
        if term.startswith("|") and term.endswith("|"):
            term = term[1:-1]
        out[term] = parse_value(m.group("val"))
    return out


def parse_reason_unknown(stdout: str) -> str:
    """Extract the answer of `(get-info :reason-unknown)`, if present."""
    m = re.search(r"\(:reason-unknown\s+(?P<reason>[^()]+?)\s*\)", stdout)
    return m.group("reason").strip() if m else ""
