"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import mcp_osgi

    assert mcp_osgi.__version__ == "1.0.0"


def test_cli_entrypoint() -> None:
    from mcp_osgi.cli import main

    assert callable(main)


def test_protocol_exports() -> None:
    from mcp_osgi.protocol import (
        JsonRpcRequest,
        JsonRpcResponse,
        ProtocolDispatcher,
        ToolRegistry,
        decode,
        encode_response,
    )

    assert ProtocolDispatcher is not None
    assert ToolRegistry is not None
    assert JsonRpcRequest is not None
    assert JsonRpcResponse is not None
    assert callable(decode)
    assert callable(encode_response)


def test_transport_exports() -> None:
    from mcp_osgi.transports import StdioTransport, create_http_app, create_sse_app

    assert StdioTransport is not None
    assert callable(create_http_app)
    assert callable(create_sse_app)
