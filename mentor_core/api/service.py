"""对外 API 服务模块。

RequestHandler 负责一次请求的完整编排：

1. Parse: 校验入站 JSON，失败返回 400，不触发上游调用。
2. Resolve / Assemble / Invoke / Normalize: 交给 flows.graph 中的线性流水线。
3. UpstreamError 映射为 500 并透传 Provider 的错误信息；
   其他任何异常映射为通用 500，原始错误只写入诊断输出。

服务端不保存跨请求状态，全部上下文都在请求体中。
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from langgraph.graph.state import CompiledStateGraph

from mentor_core.domain.exceptions import InternalError, MalformedInput, UpstreamError
from mentor_core.domain.models import TURN_ROLES, ChatMessage, GenerationRequest, Mode, Turn
from mentor_core.flows.graph import build_graph
from mentor_core.infrastructure.logging.logger import DiagnosticSink, LoggerSink
from mentor_core.prompts import build_legacy_prompt
from mentor_core.providers import create_provider
from mentor_core.providers.base import ProviderClient


LEGACY_FIELDS = ("skills", "interests", "goals")


@dataclass
class HandlerResponse:
    """与传输层无关的响应：状态码 + JSON 响应体。"""

    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)


def _decode_body(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedInput("Invalid request body")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            raise MalformedInput("Invalid request body")
    if not isinstance(raw, dict):
        raise MalformedInput("Invalid request body")
    return raw


def _parse_turns(items: Any) -> Tuple[Turn, ...]:
    if not isinstance(items, list) or not items:
        raise MalformedInput()
    turns = []
    for item in items:
        if not isinstance(item, dict):
            raise MalformedInput()
        role, content = item.get("role"), item.get("content")
        if role not in TURN_ROLES or not isinstance(content, str):
            raise MalformedInput()
        turns.append(Turn(role=role, content=content))
    return tuple(turns)


def parse_generation_request(raw: Any) -> GenerationRequest:
    """解析会话请求体 {turns|messages, mode}。

    Raises:
        MalformedInput: 请求体不是 JSON 对象，或 turns 缺失/不是非空列表/元素非法。
    """

    body = _decode_body(raw)
    items = body.get("turns")
    if items is None:
        items = body.get("messages")
    turns = _parse_turns(items)
    raw_mode = body.get("mode")
    mode = Mode.parse(raw_mode)
    return GenerationRequest(
        turns=turns,
        mode=mode,
        raw_mode=raw_mode if isinstance(raw_mode, str) else mode.value,
    )


def parse_legacy_request(raw: Any) -> Dict[str, str]:
    """解析旧版单次生成请求体 {skills, interests, goals}。"""

    body = _decode_body(raw)
    fields = {}
    for name in LEGACY_FIELDS:
        value = body.get(name)
        if not isinstance(value, str) or not value.strip():
            raise MalformedInput("Missing required fields: skills, interests, goals")
        fields[name] = value
    return fields


class RequestHandler:
    """无状态的请求处理器，每次调用互不影响。"""

    def __init__(
        self,
        provider: Optional[ProviderClient] = None,
        sink: Optional[DiagnosticSink] = None,
    ):
        self._provider = provider or create_provider()
        self._sink = sink or LoggerSink()
        self._graph: CompiledStateGraph = build_graph(self._provider)

    @property
    def provider(self) -> ProviderClient:
        return self._provider

    def handle(self, raw: Any) -> HandlerResponse:
        """处理会话模式请求。

        Returns:
            200 {"result", "metadata"}；400/500 {"error", "details"?}
        """
        return self._guarded(self._generate, raw)

    def handle_legacy(self, raw: Any) -> HandlerResponse:
        """处理旧版单次生成请求：一条固定模板的 user 消息，无模式分支。"""
        return self._guarded(self._generate_legacy, raw)

    def _generate(self, raw: Any) -> Dict[str, Any]:
        request = parse_generation_request(raw)
        state = self._graph.invoke({"request": request})
        return state["response"]

    def _generate_legacy(self, raw: Any) -> Dict[str, Any]:
        fields = parse_legacy_request(raw)
        prompt = build_legacy_prompt(**fields)
        result = self._provider.chat([ChatMessage(role="user", content=prompt)])
        return {"result": result.text}

    def _guarded(self, step: Callable[[Any], Dict[str, Any]], raw: Any) -> HandlerResponse:
        try:
            return HandlerResponse(200, step(raw))
        except MalformedInput as e:
            self._sink.report("request.malformed", e)
            return HandlerResponse(e.http_status, e.to_body())
        except UpstreamError as e:
            self._sink.report("request.upstream_error", e, {
                "code": e.code,
                "provider_status": e.provider_status,
                "details": e.details,
            })
            return HandlerResponse(e.http_status, e.to_body())
        except Exception as e:
            self._sink.report("request.internal_error", e)
            err = InternalError()
            return HandlerResponse(err.http_status, err.to_body())
