import json

import httpx
import pytest

from localspy.backend.ollama import OllamaClient
from localspy.errors import BackendError


def client_for(handler, **kwargs) -> OllamaClient:
    return OllamaClient(host="http://ollama.test:11434/", transport=httpx.MockTransport(handler), **kwargs)


def tags_handler(names):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/tags"
        return httpx.Response(200, json={"models": [{"name": n} for n in names]})

    return handler


def test_list_models():
    client = client_for(tags_handler(["codellama:7b", "llama3:latest"]))
    assert client.list_models() == ["codellama:7b", "llama3:latest"]


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        ("codellama:7b", True),
        ("llama3", True),
        ("llama3:latest", True),
        ("codellama", False),
        ("codellama:13b", False),
    ],
)
def test_has_model(requested, expected):
    client = client_for(tags_handler(["codellama:7b", "llama3:latest"]))
    assert client.has_model(requested) is expected


def test_generate_sends_options_and_returns_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": '{"issues": []}', "done": True})

    text = client_for(handler).generate("codellama:7b", "Review this", 0.2, 256)

    assert text == '{"issues": []}'
    assert seen["path"] == "/api/generate"
    assert seen["body"] == {
        "model": "codellama:7b",
        "prompt": "Review this",
        "stream": False,
        "options": {"temperature": 0.2, "num_predict": 256},
    }


def test_pull_model():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"status": "success"})

    client_for(handler).pull_model("codellama:7b")
    assert seen == {"path": "/api/pull", "body": {"model": "codellama:7b", "stream": False}}


def test_pull_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "pull model manifest: file does not exist"})

    with pytest.raises(BackendError, match="500"):
        client_for(handler).pull_model("nope:1b")


def test_error_field_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "model 'x' not found"})

    with pytest.raises(BackendError, match="not found"):
        client_for(handler).generate("x", "p", 0.1, 10)


def test_connection_error_raises_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(BackendError, match="Cannot reach Ollama"):
        client_for(handler).list_models()


def test_timeout_raises_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(BackendError, match="timed out"):
        client_for(handler, timeout=1.0).generate("codellama:7b", "p", 0.1, 10)


def test_invalid_json_raises_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    with pytest.raises(BackendError, match="Invalid response"):
        client_for(handler).list_models()


def test_missing_response_text_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"done": True})

    with pytest.raises(BackendError):
        client_for(handler).generate("codellama:7b", "p", 0.1, 10)
