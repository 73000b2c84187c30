"""Test doubles shared by the handler, session and app tests."""

from mentor_core.domain.models import FALLBACK_TEXT, ChatUsage, GenerationResult


class StubProvider:
    name = "stub"

    def __init__(self, text="## Resume Tips\n- add metrics", error=None, result=None):
        self.calls = []
        self._error = error
        self._result = result or GenerationResult(
            text=text if text is not None else FALLBACK_TEXT,
            usage=ChatUsage(prompt_tokens=10, completion_tokens=5, total_tokens=15),
            model="gpt-3.5-turbo-0125",
        )

    def chat(self, messages):
        self.calls.append(list(messages))
        if self._error is not None:
            raise self._error
        return self._result


class ListSink:
    def __init__(self):
        self.events = []

    def report(self, event, error, context=None):
        self.events.append((event, error, context or {}))

    @property
    def names(self):
        return [e[0] for e in self.events]
