"""
Type translator from claim sorts to SMT sorts.
"""
from typing import Any
import z3

from ..claims.sorts import Sort


class TypeTranslator:
    """Translates claim sorts to Z3 sorts and SMT-LIB sort names.

    Mapping:
        Integer -> Int
        Boolean -> Bool
        Bytes -> String
    """

    _SMT2_NAMES = {
        Sort.INTEGER: "Int",
        Sort.BOOLEAN: "Bool",
        Sort.BYTES: "String",
    }

    def __init__(self):
        self._sort_cache = {}

    def z3_sort(self, sort: Sort) -> Any:
        """Get the Z3 sort for a claim sort.

        Args:
            sort: Claim sort

        Returns:
            Z3 SortRef
        """
        if sort not in self._sort_cache:
            if sort == Sort.INTEGER:
                self._sort_cache[sort] = z3.IntSort()
            elif sort == Sort.BOOLEAN:
                self._sort_cache[sort] = z3.BoolSort()
            elif sort == Sort.BYTES:
                self._sort_cache[sort] = z3.StringSort()
            else:
                raise ValueError(f"Unsupported sort: {sort}")
        return self._sort_cache[sort]

    def declare(self, name: str, sort: Sort) -> Any:
        """Create a Z3 constant of the given sort.

        Args:
            name: Constant name
            sort: Claim sort

        Returns:
            Z3 constant
        """
        return z3.Const(name, self.z3_sort(sort))

    def smt2_sort(self, sort: Sort) -> str:
        """Get the SMT-LIB name of a claim sort."""
        return self._SMT2_NAMES[sort]
