"""
Pytest configuration and fixtures for act tests.
"""
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


COUNTER_SOURCE = """\
behaviour init of C
interface constructor()

creates
  uint256 x := 0

invariants
  x < 9

behaviour f of C
interface f()

case x == 0:

storage
  x => 1

behaviour g of C
interface g()

case x == 1:

storage
  x => 2

behaviour j of C
interface j()

case x == 7:

storage
  x => 100
"""


TOKEN_SOURCE = """\
// A toy token with a fixed supply
behaviour init of Token
interface constructor(uint256 _supply)

iff
  CALLVALUE == 0

creates
  uint256 supply := 1000
  uint256 balance := 1000
  bool paused := false
  string symbol := "TOK"

invariants
  balance <= supply
  supply == 1000

behaviour burn of Token
interface burn(uint256 amount)

iff
  CALLVALUE == 0
  not paused

case amount <= balance:

storage
  balance => balance - amount

returns true

case amount > balance:

returns false

behaviour pause of Token
interface pause()

storage
  paused => true
"""


@pytest.fixture
def counter_source():
    return COUNTER_SOURCE


@pytest.fixture
def token_source():
    return TOKEN_SOURCE


@pytest.fixture
def counter_claims():
    from act.checker import typecheck_source
    return typecheck_source(COUNTER_SOURCE)


@pytest.fixture
def token_claims():
    from act.checker import typecheck_source
    return typecheck_source(TOKEN_SOURCE)
