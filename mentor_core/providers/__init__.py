"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护模型配置 (registry)。
- 提供上游服务的具体实现 (openai_client)。
"""

from mentor_core.providers.base import ProviderClient
from mentor_core.providers.openai_client import OpenAIClient


def create_provider(cfg=None) -> ProviderClient:
    """创建 Provider 实例，默认使用全局配置。"""

    if cfg is None:
        # config.settings 依赖 registry 校验 default_model
        from mentor_core.config.settings import settings as cfg
    return OpenAIClient(cfg)
