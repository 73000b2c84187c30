import json

import httpx
import pytest

from mentor_core.api.service import RequestHandler
from mentor_core.client.session import MentorSession
from mentor_core.domain.exceptions import ApiError, NetworkError, UpstreamError, ValidationError
from mentor_core.prompts.modes import resolve
from mentor_core.tests.stubs import ListSink, StubProvider


def _session(provider):
    """Session whose transport runs requests through a real RequestHandler."""

    handler = RequestHandler(provider=provider, sink=ListSink())
    sent = []

    def transport(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/generate"
        sent.append(json.loads(request.content))
        res = handler.handle(request.content)
        return httpx.Response(res.status_code, json=res.body)

    session = MentorSession(api_url="http://mentor.test", transport=httpx.MockTransport(transport), timeout=1.0)
    return session, sent


def test_successful_round_trip_appends_user_and_assistant():
    session, sent = _session(StubProvider(text="## Plan"))
    result = session.submit("Python", "AI", "ML engineer", "study")
    assert result == "## Plan"
    assert len(session.history) == 2
    assert [t.role for t in session.history] == ["user", "assistant"]
    _, framing = resolve("study")
    assert session.history.turns[0].content.startswith(framing)
    assert "Skills: Python\nInterests: AI\nGoals: ML engineer" in session.history.turns[0].content
    assert sent[0]["mode"] == "study"
    assert sent[0]["turns"] == [session.history.turns[0].to_payload()]
    assert session.last_metadata["tokens_used"] == 15
    assert session.loading is False


def test_failed_round_trip_keeps_user_turn_only():
    error = UpstreamError(message="Incorrect API key provided", details={"type": "invalid_request_error"})
    session, _ = _session(StubProvider(error=error))
    with pytest.raises(ApiError) as exc:
        session.submit("Python", "AI", "ML engineer", "resume")
    assert exc.value.message == "Incorrect API key provided"
    assert session.last_error == "Incorrect API key provided"
    assert len(session.history) == 1
    assert session.history.last.role == "user"
    assert session.loading is False


def test_next_submission_resends_unanswered_user_turn():
    provider = StubProvider(error=UpstreamError(message="boom"))
    session, sent = _session(provider)
    with pytest.raises(ApiError):
        session.submit("Go", "cloud", "SRE", "career")
    provider._error = None
    session.submit("Go, Kubernetes", "cloud", "SRE", "career")
    assert len(sent[1]["turns"]) == 2
    assert sent[1]["turns"][0] == sent[0]["turns"][0]
    assert len(session.history) == 3
    assert session.last_error == ""


def test_history_grows_across_rounds():
    provider = StubProvider(text="answer")
    session, sent = _session(provider)
    session.submit("SQL", "data", "analyst", "career")
    session.ask("What about certifications?", "resume")
    assert len(session.history) == 4
    assert len(sent[1]["turns"]) == 3
    assert sent[1]["turns"][-1] == {"role": "user", "content": "What about certifications?"}
    assert len(provider.calls[1]) == 4


def test_follow_up_requires_existing_conversation():
    session, sent = _session(StubProvider())
    with pytest.raises(ValidationError):
        session.ask("hello?")
    assert sent == []
    assert len(session.history) == 0


def test_unreachable_server_raises_network_error():
    def transport(request):
        raise httpx.ConnectError("refused", request=request)

    session = MentorSession(api_url="http://mentor.test", transport=httpx.MockTransport(transport))
    with pytest.raises(NetworkError):
        session.submit("a", "b", "c")
    assert len(session.history) == 1
    assert "refused" in session.last_error


def test_plain_text_error_body_is_surfaced():
    transport = httpx.MockTransport(lambda r: httpx.Response(502, text="Bad Gateway"))
    session = MentorSession(api_url="http://mentor.test", transport=transport)
    with pytest.raises(ApiError) as exc:
        session.submit("a", "b", "c")
    assert exc.value.message == "Bad Gateway"
    assert exc.value.http_status == 502
