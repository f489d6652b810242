"""
Z3 SMT solver backend (in-process, via the z3 Python bindings).
"""
import logging
import time
from typing import Any, Dict, Tuple
import z3

from ..translator import ExprToZ3Translator, generate_query_smt2
from .result import RawOutcome, SolverResult

logger = logging.getLogger(__name__)


def _is_extended_value(text: str) -> bool:
    return "oo" in text or "epsilon" in text


class Z3Solver:
    """Z3 solver backend.

    Every query gets a fresh z3.Solver; the timeout is set as an option on
    that solver, so it is carried by the submission itself.
    """

    name = "z3"

    def __init__(self, timeout_ms: int, debug: bool = False):
        """Initialize the backend.

        Args:
            timeout_ms: Per-query timeout in milliseconds
            debug: Log the SMT-LIB form of every query and the raw answer
        """
        self.timeout_ms = timeout_ms
        self.debug = debug

    def check(self, query) -> RawOutcome:
        """Check satisfiability of a query.

        Returns:
            RawOutcome with status and, if sat, the model over the query's
            symbols
        """
        if self.debug:
            logger.debug("query:\n%s", generate_query_smt2(query, timeout_ms=self.timeout_ms))

        translator = ExprToZ3Translator()
        solver = z3.Solver()
        solver.set("timeout", self.timeout_ms)

        start_time = time.time()
        try:
            constants = translator.declare_all(query.symbols)
            for assertion in query.assertions:
                solver.add(translator.translate(assertion, constants))
            result = solver.check()
        except z3.Z3Exception as e:
            return RawOutcome(SolverResult.ERROR, reason=str(e), solver_name=self.name)
        elapsed_ms = (time.time() - start_time) * 1000

        if self.debug:
            logger.debug("z3 answered %s in %.2fms", result, elapsed_ms)

        if result == z3.sat:
            model, extended = self.get_model(solver, constants)
            status = SolverResult.EXT_FIELD_SAT if extended else SolverResult.SAT
            return RawOutcome(status, model=model, solver_time_ms=elapsed_ms, solver_name=self.name)
        elif result == z3.unsat:
            return RawOutcome(SolverResult.UNSAT, solver_time_ms=elapsed_ms, solver_name=self.name)
        else:
            return RawOutcome(
                SolverResult.UNKNOWN,
                reason=solver.reason_unknown(),
                solver_time_ms=elapsed_ms,
                solver_name=self.name,
            )

    def get_model(self, solver: z3.Solver, constants: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        """Extract the values of the query's symbols from a sat solver.

        Returns:
            (model, extended) where extended is True if some value is an
            infinite or infinitesimal extended-field value
        """
        model = solver.model()
        result: Dict[str, Any] = {}
        extended = False

        for name, const in constants.items():
            value = model.eval(const, model_completion=True)

            # Convert Z3 values to Python types
            if z3.is_int_value(value):
                result[name] = value.as_long()
            elif z3.is_true(value):
                result[name] = True
            elif z3.is_false(value):
                result[name] = False
            elif z3.is_string_value(value):
                result[name] = value.as_string()
            else:
                text = str(value)
                extended = extended or _is_extended_value(text)
                result[name] = text

        return result, extended
