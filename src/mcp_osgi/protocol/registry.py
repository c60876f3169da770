"""ToolRegistry — name-to-handler table backing ``tools/list`` and ``tools/call``."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from mcp_osgi.protocol.errors import DuplicateToolError, UnknownToolError
from mcp_osgi.protocol.models import ToolCallResult, ToolDescriptor
from mcp_osgi.utils.telemetry import ATTR_TOOL_IS_ERROR, ATTR_TOOL_NAME, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

ToolOutput = str | ToolCallResult
ToolHandler = Callable[[dict[str, Any]], ToolOutput | Awaitable[ToolOutput]]


class ToolRegistry:
    """Maintains the fixed set of tools and invokes their handlers.

    Usage::

        registry = ToolRegistry()
        registry.register(ToolDescriptor(name="echo"), lambda args: args["text"])

        registry.list()                                  # descriptors, in order
        result = await registry.invoke("echo", {"text": "hi"})

    Handler failures never escape :meth:`invoke`; they come back as a
    :class:`ToolCallResult` with ``is_error`` set. Plain (non-``async``)
    handlers run in a worker thread so ``timeout`` bounds them too; a thread
    that overruns is abandoned, not killed.
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self._timeout = timeout
        self._tools: dict[str, tuple[ToolDescriptor, ToolHandler]] = {}

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def register(self, descriptor: ToolDescriptor, handler: ToolHandler) -> None:
        """Add one tool; names must be unique."""
        if descriptor.name in self._tools:
            raise DuplicateToolError(descriptor.name)
        self._tools[descriptor.name] = (descriptor, handler)
        logger.debug("Registered tool %s", descriptor.name)

    def list(self) -> list[ToolDescriptor]:
        """Return all descriptors in registration order."""
        return [descriptor for descriptor, _ in self._tools.values()]

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDescriptor | None:
        entry = self._tools.get(name)
        return entry[0] if entry is not None else None

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def invoke(self, name: str, arguments: dict[str, Any]) -> ToolCallResult:
        """Run the handler registered under *name*.

        Raises :class:`UnknownToolError` if no such tool exists. Everything
        the handler raises, including a timeout, is folded into an error result.
        """
        entry = self._tools.get(name)
        if entry is None:
            raise UnknownToolError(name)
        _, handler = entry

        with _tracer.start_as_current_span("mcp.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            deadline = asyncio.timeout(self._timeout)
            try:
                async with deadline:
                    result = await self._run(handler, dict(arguments))
            except TimeoutError as exc:
                if deadline.expired():
                    logger.warning("Tool %s timed out after %ss", name, self._timeout)
                    result = ToolCallResult.error(
                        f"Tool execution timed out after {self._timeout}s: {name}"
                    )
                else:
                    result = _failure(name, exc)
            except Exception as exc:
                result = _failure(name, exc)
            span.set_attribute(ATTR_TOOL_IS_ERROR, result.is_error)

        return result

    async def _run(self, handler: ToolHandler, arguments: dict[str, Any]) -> ToolCallResult:
        if inspect.iscoroutinefunction(handler):
            output = await handler(arguments)
        else:
            output = await asyncio.to_thread(handler, arguments)
            if inspect.isawaitable(output):
                output = await output
        return output if isinstance(output, ToolCallResult) else ToolCallResult.from_text(str(output))


def _failure(name: str, exc: Exception) -> ToolCallResult:
    logger.exception("Tool %s failed", name)
    return ToolCallResult.error(f"Tool execution failed: {name}: {exc}")
