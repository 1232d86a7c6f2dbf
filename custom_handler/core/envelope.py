"""
Functions Host 自定义处理程序（custom handler）的调用信封模型。

- 请求：{"Data": {<binding>: <raw>}, "Metadata": {<key>: <any>}}
- 响应：{"Outputs": {...}, "Logs": [...], "ReturnValue": ...}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from custom_handler.core.errors import MalformedRequestError, MetadataTypeError

INVALID_PAYLOAD_MESSAGE = "Invalid request payload"

MessageKind = Literal["json", "text", "absent"]


class InvocationRequest(BaseModel):
    """
    Host 发来的一次调用。收到后不可修改，处理结束即丢弃。
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    Data: Dict[str, Any] = Field(default_factory=dict)
    Metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("Data", "Metadata", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class InvocationResponse(BaseModel):
    """
    返回给 Host 的调用结果，每次调用新建一个。
    """

    Outputs: Dict[str, Any] = Field(default_factory=dict)
    Logs: List[str] = Field(default_factory=list)
    ReturnValue: Any = None


@dataclass(frozen=True)
class MessageBody:
    """
    解码后的消息体：
    - json：原始值是合法 JSON（或本身已是 JSON 值）
    - text：字符串无法按 JSON 解析，保留原文
    - absent：Data 中没有该 binding
    """

    kind: MessageKind
    value: Any = None

    @property
    def present(self) -> bool:
        return self.kind != "absent"


def _reject_constant(token: str) -> Any:
    # NaN / Infinity / -Infinity 不是合法 JSON
    raise ValueError(f"Invalid JSON constant: {token}")


def _strict_json_loads(text: bytes | str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def parse_invocation_request(body: bytes | str) -> InvocationRequest:
    """
    解析请求体；任何 JSON/结构错误都统一转成 MalformedRequestError。
    """
    try:
        return InvocationRequest.model_validate(_strict_json_loads(body))
    except (ValueError, ValidationError) as exc:
        raise MalformedRequestError(INVALID_PAYLOAD_MESSAGE, detail=str(exc)) from exc


def decode_message(data: Mapping[str, Any], binding: str = "message") -> MessageBody:
    if binding not in data:
        return MessageBody(kind="absent")

    raw = data[binding]
    if not isinstance(raw, str):
        return MessageBody(kind="json", value=raw)

    try:
        return MessageBody(kind="json", value=_strict_json_loads(raw))
    except ValueError:
        # 不是 JSON，按普通字符串处理
        return MessageBody(kind="text", value=raw)


def metadata_str(metadata: Mapping[str, Any], key: str) -> Optional[str]:
    """
    读取字符串类型的元数据字段：缺失返回 None，类型不符抛 MetadataTypeError。
    """
    if key not in metadata:
        return None
    value = metadata[key]
    if not isinstance(value, str):
        raise MetadataTypeError(key, value, str)
    return value
