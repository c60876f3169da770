"""Protocol layer — JSON-RPC codec, tool registry and the MCP dispatcher."""

from mcp_osgi.protocol.codec import decode, encode_error, encode_response, encode_success
from mcp_osgi.protocol.dispatcher import ProtocolDispatcher, SessionPhase, SessionState
from mcp_osgi.protocol.errors import (
    DecodeError,
    DuplicateToolError,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
    UnknownToolError,
)
from mcp_osgi.protocol.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    ToolCallResult,
    ToolDescriptor,
)
from mcp_osgi.protocol.registry import ToolRegistry

__all__ = [
    "DecodeError",
    "DuplicateToolError",
    "InvalidParamsError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ProtocolDispatcher",
    "ProtocolError",
    "SessionPhase",
    "SessionState",
    "TextContent",
    "ToolCallResult",
    "ToolDescriptor",
    "ToolRegistry",
    "UnknownToolError",
    "decode",
    "encode_error",
    "encode_response",
    "encode_success",
]
