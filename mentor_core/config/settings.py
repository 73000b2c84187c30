"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
上游凭据只在调用时读取，启动时不做存在性校验。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from mentor_core.providers.registry import OPENAI_CONFIG


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("MENTOR_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class YamlConfigSource(PydanticBaseSettingsSource):
    """把 config.yaml 作为一个配置源，优先级低于环境变量与 .env。"""

    def __init__(self, settings_cls: Type[BaseSettings]):
        super().__init__(settings_cls)
        self._data = _load_config_from_yaml()

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        return {
            name: self._data[name]
            for name in self.settings_cls.model_fields
            if name in self._data
        }


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- 上游 Provider ----
    openai_api_key: Optional[str] = Field(default=None, description="上游 LLM API 密钥")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="上游 chat/completions 基础URL",
    )
    default_model: str = Field(
        default="mentor-chat",
        description="逻辑模型名，由 registry 映射为具体厂商模型",
    )
    http_timeout: float = Field(default=60.0, ge=1.0, description="HTTP 超时时间（秒）")

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_level: str = Field(default="INFO", description="日志级别")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    # ---- 服务端 ----
    server_host: str = Field(default="127.0.0.1", description="HTTP 服务监听地址")
    server_port: int = Field(default=8000, ge=1, le=65535, description="HTTP 服务端口")
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        description="允许跨域访问的前端来源",
    )

    # ---- 客户端 ----
    api_url: str = Field(
        default="http://127.0.0.1:8000",
        description="桌面客户端调用的服务端地址",
    )

    @field_validator("default_model")
    @classmethod
    def _known_model(cls, value: str) -> str:
        if value not in OPENAI_CONFIG.models:
            known = ", ".join(sorted(OPENAI_CONFIG.models))
            raise ValueError(f"未知的逻辑模型名 {value!r}，可选：{known}")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSource(settings_cls),
            file_secret_settings,
        )


settings = Settings()
