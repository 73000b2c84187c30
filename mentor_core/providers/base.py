"""Provider 抽象接口。

上层 RequestHandler 不直接依赖具体厂商的 HTTP 调用，而是依赖此协议：

- ProviderClient 负责把 ChatMessage 序列转成具体 API 请求，
  并把响应 JSON 解析为 GenerationResult。
- 失败时抛出 UpstreamError（或其子类），不做重试。
"""

from typing import List, Protocol

from mentor_core.domain.models import ChatMessage, GenerationResult


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志/统计。
    - chat(messages): 执行一次非流式对话调用，返回统一的 GenerationResult。
    """

    name: str

    def chat(self, messages: List[ChatMessage]) -> GenerationResult:
        ...
