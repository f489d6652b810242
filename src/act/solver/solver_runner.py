"""Run SMT solvers as subprocesses over SMT-LIBv2 files.

Solvers are expected to accept the SMT2 file as a positional argument and
print one of sat/unsat/unknown as the first answer line.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple
import logging
import os
import shutil
import subprocess
import time

from .result import SolverResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverSpec:
    """Describes how to invoke an external SMT solver."""

    name: str
    argv: Tuple[str, ...]


@dataclass(frozen=True)
class SolverRunResult:
    result: Optional[SolverResult]
    stdout: str
    stderr: str
    returncode: int
    time_ms: float
    reason: str = ""


_KNOWN_SOLVERS = {
    "cvc4": SolverSpec("cvc4", ("cvc4", "--lang=smt2")),
}

_ANSWERS = {
    "sat": SolverResult.SAT,
    "unsat": SolverResult.UNSAT,
    "unknown": SolverResult.UNKNOWN,
    "delta-sat": SolverResult.DELTA_SAT,
}


def resolve_solver(name_or_path: str) -> SolverSpec:
    """Resolve a solver name to an invocation spec."""
    if name_or_path in _KNOWN_SOLVERS:
        return _KNOWN_SOLVERS[name_or_path]

    p = Path(name_or_path)
    return SolverSpec(p.name or str(p), (str(p),))


def is_solver_available(name_or_path: str) -> bool:
    """Return True if the solver executable appears runnable on this system."""
    spec = resolve_solver(name_or_path)
    exe = spec.argv[0]

    # Explicit path
    if os.path.sep in exe or (os.path.altsep and os.path.altsep in exe):
        return os.path.exists(exe) and os.access(exe, os.X_OK)

    return shutil.which(exe) is not None


def _parse_solver_result(stdout: str) -> Tuple[Optional[SolverResult], str]:
    """Find the check-sat answer: the first line that is not a comment.

    Returns:
        (result, reason); result is None when the solver printed nothing
        recognizable
    """
    for line in stdout.splitlines():
        s = line.strip()
        if not s or s.startswith(";"):
            continue
        if s in _ANSWERS:
            return _ANSWERS[s], ""
        if s.startswith("(error"):
            return SolverResult.ERROR, s
        return None, s
    return None, ""


def run_solver(
    solver: SolverSpec,
    smt2_file: str | Path,
    *,
    extra_args: Sequence[str] = (),
    env: Optional[Mapping[str, str]] = None,
) -> SolverRunResult:
    """Run solver on an SMT2 file.

    Args:
        solver: Invocation spec
        smt2_file: Problem file
        extra_args: Options for this invocation only
        env: Extra environment variables for the child process only
    """
    smt2_path = Path(smt2_file)
    argv = [*solver.argv, *extra_args, str(smt2_path)]
    child_env = None
    if env:
        child_env = dict(os.environ)
        child_env.update(env)

    logger.debug("running %s", " ".join(argv))
    t0 = time.time()
    p = subprocess.run(
        argv,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=child_env,
    )
    dt_ms = (time.time() - t0) * 1000.0

    res, reason = _parse_solver_result(p.stdout)
    return SolverRunResult(
        result=res,
        stdout=p.stdout,
        stderr=p.stderr,
        returncode=p.returncode,
        time_ms=dt_ms,
        reason=reason,
    )
