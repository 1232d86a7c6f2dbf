"""
调用信封（invocation envelope）相关异常定义
"""
from typing import Any, Optional


class MalformedRequestError(ValueError):
    """
    请求体不是合法 JSON，或不符合 {"Data": {...}, "Metadata": {...}} 的结构。
    """

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.detail = detail


class MetadataTypeError(TypeError):
    """
    元数据字段存在，但类型与预期不符（例如 MessageId 不是字符串）。
    """

    def __init__(self, key: str, value: Any, expected: type) -> None:
        super().__init__(
            f"Metadata field {key!r} expected {expected.__name__}, "
            f"got {type(value).__name__}"
        )
        self.key = key
        self.value = value
        self.expected = expected
