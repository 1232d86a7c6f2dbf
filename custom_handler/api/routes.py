from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from custom_handler.core.envelope import INVALID_PAYLOAD_MESSAGE, parse_invocation_request
from custom_handler.core.errors import MalformedRequestError
from custom_handler.services.triggers.service_bus import ServiceBusQueueTriggerHandler

logger = logging.getLogger(__name__)

router = APIRouter()


def get_trigger_handler(request: Request) -> ServiceBusQueueTriggerHandler:
    return request.app.state.trigger_handler


@router.post(
    "/serviceBusQueueTrigger",
    summary="Service Bus 队列触发器调用",
    response_model=None,
)
async def service_bus_queue_trigger(
    request: Request,
    handler: ServiceBusQueueTriggerHandler = Depends(get_trigger_handler),
) -> Dict[str, Any] | JSONResponse:
    # 手动解析请求体：结构不对时按 Host 约定返回 400，而不是 FastAPI 默认的 422
    body = await request.body()
    try:
        invocation = parse_invocation_request(body)
    except MalformedRequestError as exc:
        logger.warning("Rejected invocation payload: %s", exc.detail)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_PAYLOAD_MESSAGE},
        )

    result = await handler.handle(invocation)
    return result.model_dump()
