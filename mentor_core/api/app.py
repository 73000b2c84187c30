"""HTTP 接口层（FastAPI）。

只负责传输：读取原始请求体，交给 RequestHandler，再按其返回的
状态码与响应体构造 JSONResponse。业务校验与错误映射都在 service 中完成。
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mentor_core.api.service import HandlerResponse, RequestHandler
from mentor_core.config.settings import settings
from mentor_core.infrastructure.logging.logger import logger
from mentor_core.providers.registry import OPENAI_CONFIG


def _to_json(res: HandlerResponse) -> JSONResponse:
    return JSONResponse(status_code=res.status_code, content=res.body)


def create_app(handler: Optional[RequestHandler] = None) -> FastAPI:
    """构造应用实例；测试中可注入使用桩 Provider 的 handler。"""

    handler = handler or RequestHandler()
    app = FastAPI(title="AI Career Mentor Agent")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.post("/api/generate")
    async def generate(request: Request):
        raw = await request.body()
        return _to_json(await run_in_threadpool(handler.handle, raw))

    @app.post("/api/generate/legacy")
    async def generate_legacy(request: Request):
        raw = await request.body()
        return _to_json(await run_in_threadpool(handler.handle_legacy, raw))

    @app.get("/api/status")
    async def status():
        model_cfg = OPENAI_CONFIG.model(settings.default_model)
        return {"status": "running", "model": model_cfg.provider_model}

    return app


app = create_app()


def main() -> None:
    logger.info(
        "server.start",
        extra={"extra": {"host": settings.server_host, "port": settings.server_port}},
    )
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    main()
