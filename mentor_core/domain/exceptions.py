"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 API 层或 UI 层做统一捕获与用户提示。
"""

from typing import Any, Dict


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MALFORMED_INPUT"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 details、provider 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        """转换为 HTTP 响应体。"""

        return {"error": self.message}


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


class ApiError(BusinessError):
    """客户端调用导师服务时收到非 2xx 响应。"""


class MalformedInput(ValidationError):
    """入站请求体缺失或格式不正确，对应 400，不会触发上游调用。"""

    def __init__(self, message: str = "Invalid message format", **extra):
        super().__init__(code="MALFORMED_INPUT", message=message, http_status=400, **extra)


class UpstreamError(BusinessError):
    """上游 LLM 服务返回非 2xx 或不可达。

    details 保存 Provider 原始的 error 对象（或原始文本），
    原样透传给调用方用于诊断。
    """

    def __init__(
        self,
        message: str,
        code: str = "UPSTREAM_ERROR",
        provider_status: int | None = None,
        details: Any = None,
        **extra,
    ):
        super().__init__(code=code, message=message, http_status=500, **extra)
        self.provider_status = provider_status
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class NetworkError(UpstreamError):
    """网络层错误，例如连接失败、超时等。"""


class RateLimitError(UpstreamError):
    """Provider 限流错误；本系统不做重试，直接向上透传。"""


class InternalError(BusinessError):
    """编排过程中的其他未预期错误，对外只暴露通用信息。"""

    def __init__(self, message: str = "Internal server error", **extra):
        super().__init__(code="INTERNAL_ERROR", message=message, http_status=500, **extra)
