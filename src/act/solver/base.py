"""
Abstract interface for SMT solver backends.
"""
from typing import TYPE_CHECKING, Protocol

from .result import RawOutcome

if TYPE_CHECKING:
    from ..verification.queries import Query


class SolverBackend(Protocol):
    """Protocol for pluggable solver backends.

    A backend answers one self-contained query at a time. It keeps no
    assertion state between calls; the only thing shared across queries is
    the configuration it was built with.
    """

    name: str

    def check(self, query: "Query") -> RawOutcome:
        """Decide satisfiability of the conjunction of a query's assertions.

        Args:
            query: Fully instantiated query

        Returns:
            RawOutcome with the solver's answer and, if sat, a model over
            the query's symbols
        """
        ...
