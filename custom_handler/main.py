import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI

from custom_handler.api.routes import router as trigger_router
from custom_handler.config import Settings, get_settings
from custom_handler.services.triggers.service_bus import ServiceBusQueueTriggerHandler

load_dotenv()

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Host 会把 stdout/stderr 收进自身日志，这里单独给触发器一个诊断 logger
TRIGGER_LOGGER_NAME = "custom_handler.triggers.serviceBusQueueTrigger"


def configure_logging(level: str) -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    创建 FastAPI 应用：挂载触发器路由，并把配置（日志级别、处理耗时、诊断 logger）
    显式注入到处理器。
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Service Bus Queue Custom Handler",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.trigger_handler = ServiceBusQueueTriggerHandler(
        processing_delay_s=settings.PROCESSING_DELAY_S,
        diagnostics=logging.getLogger(TRIGGER_LOGGER_NAME),
    )

    # Host 按 function 名直接调用 /<function>，不加前缀
    app.include_router(trigger_router)

    @app.get("/health", summary="健康检查")
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
