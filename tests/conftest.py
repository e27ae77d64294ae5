import threading

import pytest


class BagOfWordsEmbedder:
    """Deterministic fake: counts of a fixed vocabulary, plus a call log."""

    model = "fake-bow"

    def __init__(self):
        self.calls = []

    def embed(self, texts, *, cancel=None):
        self.calls.append(list(texts))
        vocab = sorted({w for t in texts for w in t.lower().split()})
        vectors = [[float(t.lower().split().count(w)) for w in vocab] for t in texts]
        return vectors, {"model": self.model, "tokens_in": 7}


class FailingEmbedder:
    model = "fake-failing"

    def __init__(self, exc=None):
        self.exc = exc or ConnectionError("network down")
        self.calls = 0

    def embed(self, texts, *, cancel=None):
        self.calls += 1
        raise self.exc


class BlockingEmbedder:
    """Blocks until released; used to exercise cancellation."""

    model = "fake-blocking"

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()

    def embed(self, texts, *, cancel=None):
        from simcheck.utils.cancel import run_cancellable

        def call():
            self.started.set()
            self.release.wait(5)
            return [[1.0, 0.0] for _ in texts]

        return run_cancellable(call, cancel), {"model": self.model, "tokens_in": 0}


@pytest.fixture
def bow_embedder():
    return BagOfWordsEmbedder()


@pytest.fixture
def failing_embedder():
    return FailingEmbedder()
