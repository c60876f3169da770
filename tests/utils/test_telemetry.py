"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from mcp_osgi.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_METHOD,
    ATTR_SESSION_ID,
    ATTR_TOOL_IS_ERROR,
    ATTR_TOOL_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        tracer = get_tracer()
        assert isinstance(tracer, trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_METHOD, "ping")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_configures_with_console(self) -> None:
        try:
            from opentelemetry.sdk.trace import TracerProvider
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        # The global provider can only be set once per process
        original = trace.get_tracer_provider()
        try:
            configure_telemetry(service_name="test-svc", export_to_console=True)
            provider = trace.get_tracer_provider()
            assert provider is not original or isinstance(provider, TracerProvider)
        finally:
            trace.set_tracer_provider(original)


class TestAttributeConstants:
    def test_constants_are_namespaced(self) -> None:
        for attr in (ATTR_METHOD, ATTR_SESSION_ID, ATTR_TOOL_NAME, ATTR_TOOL_IS_ERROR):
            assert attr.startswith("mcp.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "mcp_osgi"
