"""OpenAI chat/completions Provider 适配器。

本模块负责：

1. 接收组装好的 ChatMessage 序列。
2. 按 registry 中固定的模型、温度和最大长度构造请求体。
3. 调用 HTTP 接口并把网络/API 异常统一包装为 UpstreamError。
4. 将响应 JSON 解析为 GenerationResult（缺失文本时使用占位文本）。

凭据在调用时从注入的 settings 对象读取；缺失时照常发送，
由上游返回的鉴权错误走正常错误路径。
"""

from typing import Any, Dict, List, Optional

import httpx

from mentor_core.domain.exceptions import NetworkError, RateLimitError, UpstreamError
from mentor_core.domain.models import FALLBACK_TEXT, ChatMessage, ChatUsage, GenerationResult
from mentor_core.providers.registry import OPENAI_CONFIG, ModelConfig


GENERIC_FAILURE = "Failed to generate response"


class OpenAIClient:
    """上游 LLM 客户端实现。

    - settings: 任意带 openai_api_key / openai_base_url / http_timeout /
      default_model 属性的对象，测试中可直接传入桩对象。
    - transport: 可选的 httpx 传输层，测试时注入 httpx.MockTransport。
    """

    name = "openai"

    def __init__(self, settings, transport: Optional[httpx.BaseTransport] = None):
        self._settings = settings
        self._transport = transport

    def chat(self, messages: List[ChatMessage]) -> GenerationResult:
        model_cfg = OPENAI_CONFIG.model(getattr(self._settings, "default_model", "mentor-chat"))
        payload = self._build_payload(messages, model_cfg)
        base = getattr(self._settings, "openai_base_url", None) or OPENAI_CONFIG.base_url
        api_key = getattr(self._settings, "openai_api_key", None) or ""
        try:
            with httpx.Client(
                timeout=getattr(self._settings, "http_timeout", 60.0),
                transport=self._transport,
                trust_env=False,
            ) as client:
                resp = client.post(
                    f"{base.rstrip('/')}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {api_key}".strip(),
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # DNS 失败、连接超时等
            raise NetworkError(
                code="NETWORK_ERROR",
                message=f"Failed to reach upstream service: {e}",
                details={"type": type(e).__name__},
            )
        if resp.status_code >= 400:
            raise self._build_error(resp)
        try:
            data = resp.json()
        except ValueError:
            raise UpstreamError(
                message="Upstream returned an unreadable response",
                provider_status=resp.status_code,
                details=resp.text,
            )
        return self._parse_response(data)

    # ---- 辅助方法 ----

    def _build_payload(self, messages: List[ChatMessage], model_cfg: ModelConfig) -> dict:
        return {
            "model": model_cfg.provider_model,
            "messages": [m.to_payload() for m in messages],
            "temperature": model_cfg.temperature,
            "max_tokens": model_cfg.max_tokens,
        }

    def _build_error(self, resp: httpx.Response) -> UpstreamError:
        """从错误响应中提取 Provider 的结构化错误信息。"""

        try:
            body = resp.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        message = None
        if isinstance(error, dict):
            message = error.get("message")
        elif isinstance(error, str):
            message = error
        details: Any = error if error is not None else (resp.text or None)
        cls = RateLimitError if resp.status_code == 429 else UpstreamError
        return cls(
            message=message or GENERIC_FAILURE,
            code="RATE_LIMIT" if resp.status_code == 429 else "API_ERROR",
            provider_status=resp.status_code,
            details=details,
        )

    def _parse_response(self, data: Any) -> GenerationResult:
        if not isinstance(data, dict):
            return GenerationResult(text=FALLBACK_TEXT, raw=None)
        text = None
        choices = data.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            msg = choices[0].get("message")
            if isinstance(msg, dict) and isinstance(msg.get("content"), str):
                text = msg["content"]
        return GenerationResult(
            text=text if text is not None else FALLBACK_TEXT,
            usage=self._parse_usage(data.get("usage")),
            model=data.get("model"),
            raw=data,
        )

    @staticmethod
    def _parse_usage(usage_raw: Optional[Dict[str, Any]]) -> Optional[ChatUsage]:
        if not isinstance(usage_raw, dict) or not usage_raw:
            return None
        return ChatUsage(
            prompt_tokens=usage_raw.get("prompt_tokens", 0),
            completion_tokens=usage_raw.get("completion_tokens", 0),
            total_tokens=usage_raw.get("total_tokens", 0),
        )
