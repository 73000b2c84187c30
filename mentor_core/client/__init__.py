"""导师服务的客户端：持有会话日志并负责与服务端往返。"""

from mentor_core.client.session import MentorSession

__all__ = ["MentorSession"]
