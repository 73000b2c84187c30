"""Provider 与模型配置。

本模块将“逻辑模型名”与“具体厂商模型名”解耦：

- 逻辑名（logical_name）：在代码里使用的统一名称，例如 "mentor-chat"。
- provider_model：厂商实际提供的模型 ID，例如 "gpt-3.5-turbo"。

温度与最大输出长度在这里固定，调用方不可覆盖；超出长度的截断直接接受。"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class ModelConfig:
    """单个逻辑模型的配置。"""

    logical_name: str
    provider_model: str
    max_tokens: int
    temperature: float


@dataclass
class ProviderConfig:
    """Provider 的整体配置。"""

    name: str
    base_url: str
    models: Dict[str, ModelConfig]

    def model(self, logical_name: str) -> ModelConfig:
        """根据逻辑名取模型配置，未知名称直接报错。"""

        if logical_name not in self.models:
            raise KeyError(f"Unknown model: {logical_name!r}")
        return self.models[logical_name]


OPENAI_CONFIG = ProviderConfig(
    name="openai",
    base_url="https://api.openai.com/v1",
    models={
        "mentor-chat": ModelConfig(
            logical_name="mentor-chat",
            provider_model="gpt-3.5-turbo",
            max_tokens=1500,
            temperature=0.7,
        )
    },
)
