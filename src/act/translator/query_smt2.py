"""SMT-LIBv2 rendering of proof queries.

This is solver-independent: the same text is fed to external solvers and
logged in debug mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .smt2_translator import ExprToSMT2Translator, quote_symbol
from .type_translator import TypeTranslator


def generate_query_smt2(
    query,
    *,
    timeout_ms: Optional[int] = None,
    get_values: bool = True,
    reason_unknown: bool = False,
) -> str:
    """Generate SMT2 text for one query.

    UNSAT means the proof obligation holds. SAT means it fails and the
    `get-value` answers give the counterexample.

    Args:
        query: Query to render
        timeout_ms: When given, emitted as a `:timeout` option so the limit
            travels with the query
        get_values: Emit one `get-value` command per declared symbol
        reason_unknown: Ask for the reason of an unknown answer last
    """
    translator = ExprToSMT2Translator()
    types = TypeTranslator()
    lines: list[str] = []

    lines.append(f"; {query.contract}: {query.label}")
    lines.append("(set-option :produce-models true)")
    if timeout_ms is not None:
        lines.append(f"(set-option :timeout {int(timeout_ms)})")
    lines.append("(set-logic ALL)")
    lines.append("")

    for sym in query.symbols:
        lines.append(f"(declare-const {quote_symbol(sym.name)} {types.smt2_sort(sym.sort)})")

    for assertion in query.assertions:
        lines.append(f"(assert {translator.translate(assertion)})")

    lines.append("(check-sat)")
    if get_values:
        for sym in query.symbols:
            lines.append(f"(get-value ({quote_symbol(sym.name)}))")
    if reason_unknown:
        lines.append("(get-info :reason-unknown)")

    return "\n".join(lines) + "\n"


def write_query_smt2(query, out_file: str | Path, **kwargs) -> Path:
    out_path = Path(out_file)
    out_path.write_text(generate_query_smt2(query, **kwargs))
    return out_path
