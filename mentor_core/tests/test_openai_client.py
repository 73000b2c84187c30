import json

import httpx
import pytest

from mentor_core.domain.exceptions import NetworkError, RateLimitError, UpstreamError
from mentor_core.domain.models import FALLBACK_TEXT, ChatMessage
from mentor_core.providers import create_provider
from mentor_core.providers.openai_client import GENERIC_FAILURE, OpenAIClient


class SettingsStub:
    openai_api_key = "sk-test"
    openai_base_url = "https://llm.example/v1"
    default_model = "mentor-chat"
    http_timeout = 1.0


MESSAGES = [ChatMessage(role="system", content="sys"), ChatMessage(role="user", content="hi")]


def _client(handler, settings=None):
    return OpenAIClient(settings or SettingsStub(), transport=httpx.MockTransport(handler))


def test_chat_sends_fixed_model_parameters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "model": "gpt-3.5-turbo-0125",
                "choices": [{"index": 0, "message": {"role": "assistant", "content": "ok"}}],
                "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
            },
        )

    res = _client(handler).chat(MESSAGES)
    assert seen["url"] == "https://llm.example/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "gpt-3.5-turbo"
    assert seen["body"]["temperature"] == 0.7
    assert seen["body"]["max_tokens"] == 1500
    assert seen["body"]["messages"] == [m.to_payload() for m in MESSAGES]
    assert res.text == "ok"
    assert res.tokens_used == 4
    assert res.model == "gpt-3.5-turbo-0125"


def test_empty_choices_use_fallback_text():
    res = _client(lambda r: httpx.Response(200, json={"choices": []})).chat(MESSAGES)
    assert res.text == FALLBACK_TEXT
    assert res.usage is None
    assert res.model is None


def test_missing_content_uses_fallback_text():
    body = {"choices": [{"message": {"role": "assistant"}}], "model": "m"}
    res = _client(lambda r: httpx.Response(200, json=body)).chat(MESSAGES)
    assert res.text == FALLBACK_TEXT
    assert res.model == "m"


def test_provider_error_message_is_extracted():
    error = {"message": "Incorrect API key provided", "type": "invalid_request_error"}
    client = _client(lambda r: httpx.Response(401, json={"error": error}))
    with pytest.raises(UpstreamError) as exc:
        client.chat(MESSAGES)
    assert exc.value.message == "Incorrect API key provided"
    assert exc.value.details == error
    assert exc.value.provider_status == 401
    assert exc.value.http_status == 500


def test_unstructured_error_gets_generic_message():
    client = _client(lambda r: httpx.Response(502, text="Bad Gateway"))
    with pytest.raises(UpstreamError) as exc:
        client.chat(MESSAGES)
    assert exc.value.message == GENERIC_FAILURE
    assert exc.value.details == "Bad Gateway"


def test_rate_limit_is_an_upstream_error():
    client = _client(lambda r: httpx.Response(429, json={"error": {"message": "slow down"}}))
    with pytest.raises(RateLimitError) as exc:
        client.chat(MESSAGES)
    assert isinstance(exc.value, UpstreamError)
    assert exc.value.message == "slow down"


def test_network_failure_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc:
        _client(handler).chat(MESSAGES)
    assert "connection refused" in exc.value.message


def test_missing_api_key_is_sent_as_is():
    class NoKey(SettingsStub):
        openai_api_key = None

    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(401, json={"error": {"message": "You didn't provide an API key."}})

    with pytest.raises(UpstreamError) as exc:
        _client(handler, NoKey()).chat(MESSAGES)
    assert seen["auth"] == "Bearer"
    assert "API key" in exc.value.message


def test_chat_with_patched_httpx_client(monkeypatch):
    class Resp:
        status_code = 200

        def json(self):
            return {"choices": [{"index": 0, "message": {"role": "assistant", "content": "patched"}}]}

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    res = OpenAIClient(SettingsStub()).chat(MESSAGES)
    assert res.text == "patched"


def test_create_provider_uses_given_settings():
    provider = create_provider(SettingsStub())
    assert isinstance(provider, OpenAIClient)
    assert provider.name == "openai"


@pytest.mark.parametrize(
    "body",
    [
        {"choices": {"first": {"message": {"role": "assistant", "content": "x"}}}},
        {"choices": [{"message": "plain"}]},
        {"choices": [{"message": {"role": "assistant", "content": ["not", "text"]}}]},
        {"choices": ["plain"]},
        ["not", "an", "object"],
    ],
)
def test_malformed_success_body_uses_fallback_text(body):
    res = _client(lambda r: httpx.Response(200, json=body)).chat(MESSAGES)
    assert res.text == FALLBACK_TEXT
