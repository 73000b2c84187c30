"""统一的对话与结果数据模型。

本模块定义了请求编排流水线在各层之间共享的标准数据结构：

- Turn: 客户端会话中的一条消息（user/assistant），创建后不可变。
- Mode: 封闭的指导模式枚举，未知值一律回落到 career。
- ChatMessage: 发给上游 LLM 的一条消息（含 system）。
- GenerationRequest: 解析后的入站请求。
- GenerationResult: 从上游响应解析出的统一结果。

Provider 适配器（如 OpenAIClient）只依赖这些模型，
并负责在厂商 JSON 与这些模型之间做转换。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple


# 会话中允许出现的角色（system 只由服务端组装）
TurnRole = Literal["user", "assistant"]
Role = Literal["system", "user", "assistant"]

TURN_ROLES = ("user", "assistant")

# 上游成功返回但没有生成内容时使用的占位文本
FALLBACK_TEXT = "No response generated"


@dataclass(frozen=True)
class Turn:
    """会话中的一轮消息，顺序即对话顺序。"""

    role: TurnRole
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class Mode(str, Enum):
    """指导模式。

    集合是封闭的；parse 对任意输入都有定义，未识别的值返回 CAREER。
    """

    CAREER = "career"
    RESUME = "resume"
    STUDY = "study"
    INTERVIEW = "interview"

    @classmethod
    def parse(cls, value: Any) -> "Mode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for mode in cls:
                if mode.value == value:
                    return mode
        return cls.CAREER


@dataclass(frozen=True)
class ModeProfile:
    """某个模式对应的任务指令与客户端引导语。

    - task_instruction: 写入 system prompt 的 Focus Area。
    - framing_sentence: 客户端拼接到用户消息开头的说明句。
    - label: 界面下拉框中展示的名称。
    """

    mode: Mode
    task_instruction: str
    framing_sentence: str
    label: str


@dataclass
class ChatMessage:
    """发往上游的一条消息。"""

    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatUsage:
    """Provider 返回的 token 统计信息（统一格式）。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class GenerationRequest:
    """一次已通过校验的生成请求。

    - turns: 不可变的会话序列（至少一条）。
    - mode: 解析后的模式。
    - raw_mode: 入站请求中原样的 mode 字符串，仅用于追踪。
    """

    turns: Tuple[Turn, ...]
    mode: Mode
    raw_mode: str


@dataclass
class GenerationResult:
    """一次上游调用的最终结果。

    - text: 生成文本，缺失时为 FALLBACK_TEXT，永不为 None。
    - usage: 可选的 token 使用统计。
    - model: 上游实际使用的模型 ID（可选）。
    - raw: 原始响应 JSON，用于调试。
    """

    text: str = FALLBACK_TEXT
    usage: Optional[ChatUsage] = None
    model: Optional[str] = None
    raw: Optional[dict] = None

    @property
    def tokens_used(self) -> Optional[int]:
        return self.usage.total_tokens if self.usage else None
