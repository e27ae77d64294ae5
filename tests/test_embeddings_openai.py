"""OpenAIEmbeddingClient against a fake SDK client (no network)."""

import threading
import time
from types import SimpleNamespace

import httpx
import openai
import pytest

from simcheck.errors import AnalysisCancelled, ServiceError
from simcheck.models import EmbeddingSettings
from simcheck.services.embeddings_openai import OpenAIEmbeddingClient


class FakeEmbeddings:
    def __init__(self, response=None, exc=None, delay=0.0):
        self.response = response
        self.exc = exc
        self.delay = delay
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.delay:
            time.sleep(self.delay)
        if self.exc:
            raise self.exc
        return self.response


def make_response(vectors, order=None, model="text-embedding-3-small", tokens=12):
    order = order or list(range(len(vectors)))
    data = [SimpleNamespace(index=i, embedding=vectors[i]) for i in order]
    return SimpleNamespace(
        data=data, model=model, usage=SimpleNamespace(prompt_tokens=tokens)
    )


def make_client(embeddings, **settings):
    fake = SimpleNamespace(embeddings=embeddings)
    return OpenAIEmbeddingClient(
        api_key="sk-test",
        settings=EmbeddingSettings(model="text-embedding-3-small", **settings),
        client=fake,
    )


def test_embed_returns_vectors_in_input_order():
    vectors = [[1.0, 0.0], [0.0, 1.0], [0.5, 0.5]]
    fake = FakeEmbeddings(make_response(vectors, order=[2, 0, 1]))
    client = make_client(fake)

    out, meta = client.embed(["a", "b", "c"])

    assert out == vectors
    assert meta == {"model": "text-embedding-3-small", "tokens_in": 12}
    assert fake.kwargs == {"model": "text-embedding-3-small", "input": ["a", "b", "c"]}


def test_dimensions_are_forwarded():
    fake = FakeEmbeddings(make_response([[1.0], [2.0]]))
    client = make_client(fake, dimensions=256)
    client.embed(["a", "b"])
    assert fake.kwargs["dimensions"] == 256


def test_sdk_error_becomes_service_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
    fake = FakeEmbeddings(exc=openai.APITimeoutError(request=request))
    client = make_client(fake)

    with pytest.raises(ServiceError) as exc:
        client.embed(["a", "b"])
    assert isinstance(exc.value.__cause__, openai.APITimeoutError)


@pytest.mark.parametrize(
    "vectors",
    [
        [[1.0, 0.0]],  # wrong count
        [[1.0, 0.0], [1.0]],  # ragged
        [[1.0, "x"], [0.0, 1.0]],  # non-numeric
        [[], []],  # empty vectors
    ],
)
def test_malformed_response_is_service_error(vectors):
    response = SimpleNamespace(
        data=[SimpleNamespace(index=i, embedding=v) for i, v in enumerate(vectors)],
        model="m",
        usage=None,
    )
    client = make_client(FakeEmbeddings(response))
    with pytest.raises(ServiceError):
        client.embed(["a", "b"])


def test_missing_data_is_service_error():
    client = make_client(FakeEmbeddings(SimpleNamespace(model="m")))
    with pytest.raises(ServiceError):
        client.embed(["a", "b"])


def test_cancel_discards_in_flight_call():
    fake = FakeEmbeddings(make_response([[1.0], [1.0]]), delay=1.0)
    client = make_client(fake)
    cancel = threading.Event()
    threading.Timer(0.1, cancel.set).start()

    started = time.monotonic()
    with pytest.raises(AnalysisCancelled):
        client.embed(["a", "b"], cancel=cancel)
    assert time.monotonic() - started < 0.9


def test_missing_api_key_raises():
    with pytest.raises(RuntimeError):
        OpenAIEmbeddingClient(api_key="", settings=EmbeddingSettings(model="m"))


def test_empty_input_makes_no_call():
    fake = FakeEmbeddings(exc=AssertionError("should not be called"))
    client = make_client(fake)
    assert client.embed([]) == ([], {"model": "text-embedding-3-small", "tokens_in": 0})
