import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from mentor_core.config.settings import settings


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("mentor_core")
    if logger.handlers:
        return logger
    level = logging.getLevelName(settings.log_level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    class JsonFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            msg = record.getMessage()
            if settings.log_redact_content:
                msg = (msg or "")[:64]
            payload = {
                "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
                "level": record.levelname,
                "name": record.name,
                "msg": msg,
            }
            extra = getattr(record, "extra", None)
            if isinstance(extra, dict):
                payload.update(extra)
            return json.dumps(payload, ensure_ascii=False, default=str)

    fh = logging.FileHandler(log_dir / "mentor.log", encoding="utf-8")
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(sh)
    return logger


logger = setup_logger()


class DiagnosticSink(Protocol):
    """请求失败时的诊断输出接口，便于在测试中替换。"""

    def report(self, event: str, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        ...


class LoggerSink:
    """默认实现：写入 mentor_core 日志。"""

    def __init__(self, target: logging.Logger = logger):
        self._logger = target

    def report(self, event: str, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        fields: Dict[str, Any] = {"event": event, "error_type": type(error).__name__, "error": str(error)}
        fields.update(context or {})
        level = logging.WARNING if event == "request.malformed" else logging.ERROR
        self._logger.log(
            level,
            f"{event}: {error}",
            exc_info=error if event == "request.internal_error" else None,
            extra={"extra": fields},
        )
