from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from custom_handler.core.envelope import (
    InvocationRequest,
    InvocationResponse,
    decode_message,
    metadata_str,
)
from custom_handler.core.errors import MetadataTypeError

logger = logging.getLogger(__name__)

LOG_PREFIX = "Python ServiceBus Queue trigger"


class ServiceBusQueueTriggerHandler:
    """
    Service Bus 队列触发器：读取 message 与元数据，模拟一段耗时处理，返回日志。

    每次调用相互独立、不共享可变状态；耗时步骤使用 asyncio.sleep，
    不会阻塞同一事件循环上的其他调用。
    """

    def __init__(
        self,
        *,
        processing_delay_s: float = 5.0,
        diagnostics: Optional[logging.Logger] = None,
    ) -> None:
        if processing_delay_s < 0:
            raise ValueError("processing_delay_s must be >= 0")
        self._delay = processing_delay_s
        self._log = diagnostics or logger

    async def handle(self, request: InvocationRequest) -> InvocationResponse:
        logs: List[str] = []

        message = decode_message(request.Data)
        logs.append(f"{LOG_PREFIX} start processing a message")
        if message.present:
            self._log.info(
                "%s start processing a message (%s): %r", LOG_PREFIX, message.kind, message.value
            )
        else:
            self._log.info("%s start processing a message: no message binding", LOG_PREFIX)

        try:
            message_id = metadata_str(request.Metadata, "MessageId")
        except MetadataTypeError as exc:
            self._log.warning("Skip MessageId log line: %s", exc)
            message_id = None
        if message_id is not None:
            self._log.info("MessageId: %s", message_id)
            logs.append(f"MessageId: {message_id}")

        # 仅输出到诊断日志，不写入返回的 Logs
        for key in ("EnqueuedTimeUtc", "DeliveryCount"):
            if key in request.Metadata:
                self._log.info("%s: %s", key, request.Metadata[key])

        await asyncio.sleep(self._delay)

        logs.append(f"{LOG_PREFIX} end processing a message")
        self._log.info("%s end processing a message", LOG_PREFIX)

        return InvocationResponse(Outputs={}, Logs=logs, ReturnValue=None)
