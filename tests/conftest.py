import pytest

from soul_builder.engine import SoulBuilderEngine
from soul_builder.question_set import QuestionSet
from soul_builder.render import DocumentRenderer
from soul_builder.store import SessionStore

from helpers.fakes import FakeClock


@pytest.fixture(scope="session")
def questions():
    """Load the English question set once for the entire test session."""
    q = QuestionSet(locale="en")
    q.load()
    return q


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Fresh SessionStore on a fake clock: 1h expiry, 10 min sweep interval."""
    return SessionStore(expiry_seconds=3600, sweep_interval_seconds=600, clock=clock)


@pytest.fixture
def engine(store, questions):
    return SoulBuilderEngine(store, questions)


@pytest.fixture
def renderer():
    return DocumentRenderer()
