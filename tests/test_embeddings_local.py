import numpy as np
import pytest

pytest.importorskip("sentence_transformers")

from simcheck.errors import ServiceError  # noqa: E402
from simcheck.models import EmbeddingSettings  # noqa: E402
from simcheck.services.embeddings_local import SentenceTransformerEmbeddingClient  # noqa: E402


class FakeEncoder:
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc

    def encode(self, texts, convert_to_numpy=True):
        if self.exc:
            raise self.exc
        return self.result


def make_client(encoder):
    client = SentenceTransformerEmbeddingClient(EmbeddingSettings(model="all-MiniLM-L6-v2"))
    client._model = encoder
    return client


def test_local_embed_returns_lists():
    client = make_client(FakeEncoder(np.array([[0.1, 0.2], [0.3, 0.4]])))
    vectors, meta = client.embed(["a", "b"])
    assert vectors[0] == pytest.approx([0.1, 0.2])
    assert vectors[1] == pytest.approx([0.3, 0.4])
    assert meta["model"] == "all-MiniLM-L6-v2"


def test_local_encoder_failure_is_service_error():
    client = make_client(FakeEncoder(exc=RuntimeError("CUDA out of memory")))
    with pytest.raises(ServiceError):
        client.embed(["a", "b"])
