"""MCP models — JSON-RPC 2.0 messages, tool descriptors and tool results.

These are the in-memory shapes the codec produces and consumes. Wire names
(``inputSchema``, ``isError``) are kept as aliases so ``model_dump(by_alias=True)``
yields exactly what goes on the wire.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

RequestId = int | float | str

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification.

    ``id`` is ``None`` for notifications.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    id: RequestId | None = None
    params: dict[str, Any] = {}

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> Any:
        # bool is an int subclass; JSON true/false is never a valid id
        if value is not None and (isinstance(value, bool) or not isinstance(value, int | float | str)):
            msg = "id must be a string, a number or null"
            raise ValueError(msg)
        return value

    @field_validator("params", mode="before")
    @classmethod
    def _default_params(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_notification(self) -> bool:
        """True for messages that must never be answered."""
        return self.id is None or self.method.startswith("notifications/")


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _one_of_result_or_error(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "response must carry exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, request_id: RequestId | None, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: RequestId | None,
        code: int,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message, data=data))

    def to_wire(self) -> dict[str, Any]:
        """Return the wire dict: ``id`` always present, ``data`` only when set."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result
        return payload


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
    )


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """The result of one ``tools/call`` invocation."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = []
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str) -> ToolCallResult:
        """Create a successful result with a single text block."""
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, message: str) -> ToolCallResult:
        """Create a tool-level failure result."""
        return cls(content=[TextContent(text=message)], is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)
