"""客户端会话。

MentorSession 持有本次运行期间的 ConversationLog，并负责：

- 提交前先追加 user 轮次，保证请求总是包含最新一条用户消息；
- 只有成功返回后才追加 assistant 轮次；失败时不回滚已追加的 user 轮次，
  下一次提交会把它作为上下文再次发送；
- loading 只是给界面用的提示标志，不做互斥。

会话不落盘，进程结束即丢弃。
"""

from typing import Any, Dict, Optional

import httpx

from mentor_core.config.settings import settings
from mentor_core.domain.conversation import ConversationLog
from mentor_core.domain.exceptions import ApiError, NetworkError, ValidationError
from mentor_core.domain.models import Mode
from mentor_core.infrastructure.logging.logger import logger
from mentor_core.prompts import compose_user_message


GENERIC_FAILURE = "Failed to generate response"


class MentorSession:
    def __init__(
        self,
        api_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self._api_url = (api_url or settings.api_url).rstrip("/")
        self._transport = transport
        self._timeout = timeout or settings.http_timeout
        self.history = ConversationLog()
        self.loading = False
        self.last_result: str = ""
        self.last_error: str = ""
        self.last_metadata: Dict[str, Any] = {}

    def submit(self, skills: str, interests: str, goals: str, mode: Any = Mode.CAREER) -> str:
        """用表单字段发起一轮对话，返回生成文本。

        Raises:
            ApiError: 服务端返回非 2xx。
            NetworkError: 无法连接服务端。
        """
        content = compose_user_message(skills, interests, goals, mode)
        return self._round_trip(content, mode)

    def ask(self, text: str, mode: Any = Mode.CAREER) -> str:
        """在已有会话上追问；第一轮必须来自表单提交。"""
        if not len(self.history):
            raise ValidationError(code="EMPTY_CONVERSATION", message="Submit the form before asking follow-up questions")
        if not text.strip():
            raise ValidationError(code="EMPTY_MESSAGE", message="Message must not be empty")
        return self._round_trip(text, mode)

    def _round_trip(self, content: str, mode: Any) -> str:
        self.loading = True
        self.last_error = ""
        self.history = self.history.append_user(content)
        mode_value = Mode.parse(mode).value
        try:
            data = self._post({"turns": self.history.to_payload(), "mode": mode_value})
        except (ApiError, NetworkError) as e:
            self.last_error = e.message
            logger.warning("session.failed", extra={"extra": {"code": e.code, "turns": len(self.history)}})
            raise
        finally:
            self.loading = False
        result = data.get("result")
        if not isinstance(result, str):
            result = ""
        self.history = self.history.append_assistant(result)
        self.last_result = result
        self.last_metadata = data.get("metadata") or {}
        return result

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(f"{self._api_url}/api/generate", json=payload)
        except httpx.RequestError as e:
            raise NetworkError(message=f"Failed to reach mentor service: {e}", code="NETWORK_ERROR")
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message=self._error_message(resp), http_status=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            raise ApiError(code="API_ERROR", message=GENERIC_FAILURE, http_status=resp.status_code)
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text or GENERIC_FAILURE
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return resp.text or GENERIC_FAILURE
