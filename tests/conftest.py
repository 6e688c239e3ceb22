import pytest

from mal.builtin import core_builtin
from mal.interpreter import Interpreter
from mal.types.environment import Environment

# Shared fixtures:
# - `env`: a root Environment holding only the builtin library, for tests that
#   drive `evaluate` directly with hand-built or freshly read forms.
# - `interp`: a full Interpreter (builtins + eval + bootstrap `not`/`load-file`),
#   for tests that go through source text.


@pytest.fixture
def env():
    e = Environment()
    core_builtin.register(e)
    return e


@pytest.fixture
def interp():
    return Interpreter()
