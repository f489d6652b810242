"""
CVC4 backend: SMT-LIB text run through a cvc4 child process.
"""
import logging
import tempfile
from pathlib import Path
from typing import List

from ..translator import write_query_smt2
from .model import parse_get_value_output, parse_reason_unknown
from .result import RawOutcome, SolverResult
from .solver_runner import resolve_solver, run_solver

logger = logging.getLogger(__name__)


class Cvc4Solver:
    """Runs each query in its own cvc4 process.

    cvc4 has no in-query timeout, so the limit and model production are
    passed as command-line options of that one child process.
    """

    name = "cvc4"

    def __init__(self, timeout_ms: int, debug: bool = False, executable: str = "cvc4"):
        self.timeout_ms = timeout_ms
        self.debug = debug
        self.spec = resolve_solver(executable)

    def options(self) -> List[str]:
        opts = [
            "--incremental",
            "--produce-models",
            f"--tlimit-per={self.timeout_ms}",
        ]
        if self.debug:
            opts.append("--verbose")
        return opts

    def check(self, query) -> RawOutcome:
        with tempfile.TemporaryDirectory(prefix="act-") as tmp:
            path = write_query_smt2(query, Path(tmp) / "query.smt2", reason_unknown=True)
            if self.debug:
                logger.debug("query:\n%s", path.read_text())
            try:
                run = run_solver(self.spec, path, extra_args=self.options())
            except OSError as e:
                return RawOutcome(SolverResult.ERROR, reason=str(e), solver_name=self.name)

        if self.debug:
            logger.debug("cvc4 exited %d\nstdout:\n%s\nstderr:\n%s",
                         run.returncode, run.stdout, run.stderr)

        if run.result is None:
            reason = run.reason or run.stderr.strip() or f"cvc4 exited with status {run.returncode}"
            return RawOutcome(SolverResult.ERROR, reason=reason,
                              solver_time_ms=run.time_ms, solver_name=self.name)

        if run.result == SolverResult.SAT:
            model = parse_get_value_output(run.stdout)
            return RawOutcome(SolverResult.SAT, model={s.name: model.get(s.name) for s in query.symbols},
                              solver_time_ms=run.time_ms, solver_name=self.name)
        if run.result == SolverResult.UNKNOWN:
            return RawOutcome(SolverResult.UNKNOWN, reason=parse_reason_unknown(run.stdout),
                              solver_time_ms=run.time_ms, solver_name=self.name)
        return RawOutcome(run.result, reason=run.reason,
                          solver_time_ms=run.time_ms, solver_name=self.name)
