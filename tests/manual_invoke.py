#!/usr/bin/env python3

"""
手动向本地自定义处理程序发送一次 Service Bus 触发调用，便于脱离 Functions Host 调试。

用法示例：
    python tests/manual_invoke.py --message '{"orderId": 42}' --message-id abc-123
    python tests/manual_invoke.py --concurrency 5
    python tests/manual_invoke.py --raw-body '{'
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

import httpx

DEFAULT_ENDPOINT = "http://127.0.0.1:8080/serviceBusQueueTrigger"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="模拟 Functions Host 调用 Service Bus 队列触发器并打印响应"
    )
    parser.add_argument(
        "--endpoint",
        default=DEFAULT_ENDPOINT,
        help=f"接口地址，默认 {DEFAULT_ENDPOINT}",
    )
    parser.add_argument(
        "--message",
        default='"hello from manual_invoke"',
        help="Data.message 原始值（可以是 JSON 文本，也可以是普通字符串）",
    )
    parser.add_argument("--message-id", help="Metadata.MessageId，默认随机生成")
    parser.add_argument(
        "--omit-message",
        action="store_true",
        help="不携带 Data.message",
    )
    parser.add_argument(
        "--raw-body",
        help="直接以字符串发送原始请求体，调试 400 分支",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=1,
        help="同时发送的请求数，用于观察耗时是否被串行化",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="请求超时时间（秒）",
    )
    return parser


def _build_envelope(args: argparse.Namespace) -> Dict[str, Any]:
    data: Dict[str, Any] = {} if args.omit_message else {"message": args.message}
    return {
        "Data": data,
        "Metadata": {
            "MessageId": args.message_id or uuid.uuid4().hex,
            "EnqueuedTimeUtc": datetime.now(timezone.utc).isoformat(),
            "DeliveryCount": 1,
        },
    }


async def _invoke(
    client: httpx.AsyncClient,
    endpoint: str,
    payload: Dict[str, Any],
    *,
    raw_body: str | None = None,
) -> httpx.Response:
    if raw_body is not None:
        return await client.post(
            endpoint,
            content=raw_body,
            headers={"Content-Type": "application/json"},
        )
    return await client.post(endpoint, json=payload)


async def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    payload = _build_envelope(args)
    logging.info("请求地址: %s", args.endpoint)
    if args.raw_body is None:
        logging.info("请求体(JSON):\n%s", json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        logging.info("使用原始请求体字符串:\n%s", args.raw_body)

    async with httpx.AsyncClient(timeout=args.timeout) as client:
        start = time.perf_counter()
        try:
            responses = await asyncio.gather(
                *(
                    _invoke(client, args.endpoint, payload, raw_body=args.raw_body)
                    for _ in range(max(1, args.concurrency))
                )
            )
        except httpx.HTTPError as exc:
            logging.exception("请求失败: %s", exc)
            sys.exit(1)
        duration = time.perf_counter() - start

    logging.info("共 %d 个请求，总耗时: %.2fs", len(responses), duration)
    for idx, response in enumerate(responses):
        try:
            body = json.dumps(response.json(), ensure_ascii=False, indent=2)
        except ValueError:
            body = response.text
        logging.info("#%d HTTP 状态: %s\n%s", idx, response.status_code, body)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    asyncio.run(main())
