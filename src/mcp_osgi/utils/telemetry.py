"""OpenTelemetry tracing helpers for the MCP server.

Provides a thin wrapper around the OpenTelemetry API so the rest of the
codebase can call ``get_tracer()`` without caring whether the SDK is
installed.  When the SDK is *not* configured the API returns no-op
implementations.

Usage::

    from mcp_osgi.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("mcp.request") as span:
        span.set_attribute(ATTR_METHOD, "tools/list")

To activate real tracing, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install mcp-osgi-server[otel]``).
Spans are exported to stderr so they never mix with the stdio wire.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_METHOD = "mcp.method"
ATTR_REQUEST_ID = "mcp.request.id"
ATTR_SESSION_ID = "mcp.session.id"
ATTR_TRANSPORT = "mcp.transport"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_TOOL_IS_ERROR = "mcp.tool.is_error"
ATTR_ERROR_CODE = "mcp.error.code"

_INSTRUMENTATION_NAME = "mcp_osgi"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "mcp-osgi-server",
    export_to_console: bool = True,
) -> None:
    """Configure OpenTelemetry tracing (requires ``mcp-osgi-server[otel]``).

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, export spans as JSON to stderr.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import SimpleSpanProcessor
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install mcp-osgi-server[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    """Attach the console exporter (JSON to stderr)."""
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter

    provider.add_span_processor(processor_cls(ConsoleSpanExporter(out=sys.stderr)))
