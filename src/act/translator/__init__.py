"""
Translation from typed claims to SMT terms (Z3 objects and SMT-LIB text).
"""

from .type_translator import TypeTranslator
from .z3_translator import ExprToZ3Translator
from .smt2_translator import ExprToSMT2Translator
from .query_smt2 import generate_query_smt2, write_query_smt2

__all__ = [
    "TypeTranslator",
    "ExprToZ3Translator",
    "ExprToSMT2Translator",
    "generate_query_smt2",
    "write_query_smt2",
]
