"""领域层模型与协议。

包含：
- models: Turn / Mode / ChatMessage / GenerationResult 等统一模型。
- conversation: 客户端持有的只追加会话日志 ConversationLog。
- exceptions: 业务异常类型定义。
"""
