"""
Tests for the high-level checking API.
"""
import pytest

from act import (
    ConfigurationError,
    LexError,
    ParseError,
    SolverConfig,
    TypeCheckError,
    lex_source,
    parse_source,
    prove_source,
    typecheck_source,
)


def test_lex_source(counter_source):
    tokens = lex_source(counter_source)
    assert tokens[0].value == "behaviour"
    assert tokens[-1].type.name == "EOF"


def test_parse_source(counter_source):
    assert len(parse_source(counter_source).behaviours) == 4


def test_typecheck_source(token_source):
    claims = typecheck_source(token_source)
    assert [c.name for c in claims.contracts] == ["Token"]


def test_prove_source(counter_source):
    (verdict,) = prove_source(counter_source)
    assert [o.label for o in verdict.failures] == ["behaviour j, case x == 7"]


def test_prove_source_validates_config_first():
    with pytest.raises(ConfigurationError):
        prove_source("this is not act source", SolverConfig(solver="nope"))


@pytest.mark.parametrize("source, error", [
    ("behaviour f of C\ninterface f(#)\n", LexError),
    ("behaviour f of\n", ParseError),
    ("behaviour f of C\ninterface f()\n", TypeCheckError),
])
def test_front_end_errors(source, error):
    with pytest.raises(error):
        prove_source(source)
