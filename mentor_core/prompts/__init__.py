"""提示词加载与组装工具。

按语言(locale) 从 prompts/<locale> 目录读取模板文本：
- mentor_system.md: 会话模式下的 system prompt，嵌入模式与 Focus Area。
- legacy_roadmap.md: 旧版单次生成入口使用的 user prompt。
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, List

from mentor_core.domain.models import ChatMessage, Turn
from mentor_core.prompts.modes import resolve_mode


PROMPTS_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=None)
def load_prompt(name: str, locale: str = "en") -> str:
    """根据模板名和语言加载提示词文本。"""

    fname = PROMPTS_DIR / locale / f"{name}.md"
    return fname.read_text(encoding="utf-8")


def build_system_prompt(task_instruction: str, mode: str) -> str:
    return load_prompt("mentor_system").format(mode=mode, task_instruction=task_instruction)


def assemble_messages(turns: Iterable[Turn], task_instruction: str, mode: str) -> List[ChatMessage]:
    """组装发往上游的消息序列。

    固定以唯一一条 system 消息开头，其后按原顺序追加全部会话轮次，
    不丢弃、不重排，也不校验内容（校验由 RequestHandler 负责）。
    """

    messages = [ChatMessage(role="system", content=build_system_prompt(task_instruction, mode))]
    for turn in turns:
        messages.append(ChatMessage(role=turn.role, content=turn.content))
    return messages


def compose_user_message(skills: str, interests: str, goals: str, mode: Any) -> str:
    """客户端提交时构造的用户消息：模式引导语 + 表单字段。"""

    framing = resolve_mode(mode).framing_sentence
    return f"{framing}\n\nSkills: {skills}\nInterests: {interests}\nGoals: {goals}"


def build_legacy_prompt(skills: str, interests: str, goals: str) -> str:
    return load_prompt("legacy_roadmap").format(skills=skills, interests=interests, goals=goals)
