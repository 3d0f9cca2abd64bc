"""
Shared pytest fixtures.
"""
import pytest
from loguru import logger


@pytest.fixture
def log_messages():
    """Collect loguru messages at WARNING and above for the duration of a test"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


class ScriptedUniform:
    """Uniform source that cycles through a fixed list of draws"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def scripted_uniform():
    return ScriptedUniform
