from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from .models import Turn, TurnRole


@dataclass(frozen=True)
class ConversationLog:
    """客户端会话日志：只追加、值语义。

    append_user / append_assistant 返回新的日志对象，原对象保持不变；
    日志从不截断、重排或原地修改。
    """

    turns: Tuple[Turn, ...] = ()

    def append_user(self, content: str) -> "ConversationLog":
        return self._append("user", content)

    def append_assistant(self, content: str) -> "ConversationLog":
        return self._append("assistant", content)

    def _append(self, role: TurnRole, content: str) -> "ConversationLog":
        return ConversationLog(turns=self.turns + (Turn(role=role, content=content),))

    @property
    def last(self) -> Turn | None:
        return self.turns[-1] if self.turns else None

    def to_payload(self) -> List[Dict[str, str]]:
        return [t.to_payload() for t in self.turns]

    def __len__(self) -> int:
        return len(self.turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.turns)
