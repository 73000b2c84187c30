"""Career Mentor 顶层包。

该包提供职业导师 Agent 的核心实现，
包括配置加载、领域模型、Provider 适配、模式解析与提示词组装、
请求编排流水线、HTTP 接口以及客户端会话与桌面界面。
"""

from mentor_core.domain.models import Mode, Turn

__all__ = ["Mode", "Turn"]
