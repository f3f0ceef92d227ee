"""
Shared fixtures: sample blocks, the NLTK tagger guard, a fixed tag table
and in-process fakes for the broker channel and Redis client.
"""

import pytest

from content_designer import nlp
from content_designer.models import ContentBlock


@pytest.fixture
def tagger():
    """Skip tests that need part-of-speech tags when the tagger data is missing."""
    if not nlp.ensure_tagger():
        pytest.skip("NLTK perceptron tagger data unavailable")
    return nlp


@pytest.fixture
def fixed_tags(monkeypatch):
    """Replace the perceptron tagger with a word-to-tag table; unlisted words tag as DT."""
    table = {}

    def tag_text(text):
        return tuple((word, table.get(word.lower(), 'DT')) for word in text.split())

    monkeypatch.setattr(nlp, 'tag_text', tag_text)
    return table


def make_block(block_id, content, block_type='paragraph', **kwargs):
    return ContentBlock(id=block_id, type=block_type, content=content, **kwargs)


@pytest.fixture
def paragraph_blocks():
    """Four plain sentences with no heading-like text."""
    return [
        make_block('a', '<p>Alpha comes first in the run.</p>'),
        make_block('b', '<p>Bravo follows on from alpha.</p>'),
        make_block('c', '<p>Charlie sits third in the list.</p>'),
        make_block('d', '<p>Delta closes the sequence.</p>'),
    ]


@pytest.fixture
def sectioned_blocks():
    """Two headed sections."""
    return [
        make_block('h1', '<h2>Overview</h2>', 'heading'),
        make_block('p1', '<p>The overview body text.</p>'),
        make_block('h2', '<h2>Details</h2>', 'heading'),
        make_block('p2', '<p>The details body text.</p>'),
    ]


class FakeMethod:
    def __init__(self, delivery_tag=1):
        self.delivery_tag = delivery_tag


class FakeChannel:
    """Records acks and nacks the consumer sends"""

    def __init__(self):
        self.acked = []
        self.nacked = []

    def basic_ack(self, delivery_tag):
        self.acked.append(delivery_tag)

    def basic_nack(self, delivery_tag, requeue):
        self.nacked.append((delivery_tag, requeue))


class FakeRedis:
    """Records published messages"""

    def __init__(self):
        self.published = []
        self.closed = False

    def publish(self, channel, message):
        self.published.append((channel, message))
        return 1

    def close(self):
        self.closed = True


@pytest.fixture
def fake_channel():
    return FakeChannel()


@pytest.fixture
def fake_method():
    return FakeMethod()


@pytest.fixture
def fake_redis():
    return FakeRedis()
