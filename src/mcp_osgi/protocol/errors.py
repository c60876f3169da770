"""Error types and JSON-RPC error codes for the protocol layer."""

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures.

    Subclasses that map onto a JSON-RPC error object set ``code``.
    """

    code: int = INTERNAL_ERROR


class DecodeError(ProtocolError):
    """A raw message could not be decoded into a JSON-RPC request.

    ``request_id`` holds the id recovered from the payload, if any, so the
    caller can still correlate an ``Invalid Request`` error.
    """

    code = INVALID_REQUEST

    def __init__(self, detail: str = "", request_id: int | float | str | None = None) -> None:
        self.detail = detail
        self.request_id = request_id
        super().__init__("Invalid Request" + (f": {detail}" if detail else ""))


class MethodNotFoundError(ProtocolError):
    """The requested JSON-RPC method is not served."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class UnknownToolError(ProtocolError):
    """Requested tool does not exist in the registry."""

    code = METHOD_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class InvalidParamsError(ProtocolError):
    """Request params are missing or have the wrong shape."""

    code = INVALID_PARAMS

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid params" + (f": {detail}" if detail else ""))


class DuplicateToolError(ProtocolError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")
