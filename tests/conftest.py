import pytest

from conslisp.builtins import register
from conslisp.interpreter import Interpreter
from conslisp.reader.parser import read
from conslisp.evaluation.evaluator import evaluate
from conslisp.session import EvaluationSession
from conslisp.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def session():
    return EvaluationSession()


@pytest.fixture
def run(env, session):
    """Read and evaluate one line against the shared env, resetting the session first."""
    def _run(source):
        session.reset()
        return evaluate(read(source, session), env, session)
    return _run


@pytest.fixture
def interp():
    return Interpreter()
