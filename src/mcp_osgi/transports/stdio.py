"""Stdio transport — newline-delimited JSON-RPC over a pair of text streams.

One process is one session. Lines are processed strictly in order; a bad
line is logged and skipped and the loop keeps reading until EOF. Input is
read as bytes so invalid UTF-8 is reported per line instead of ending the
stream.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import IO, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from mcp_osgi.protocol.dispatcher import ProtocolDispatcher

logger = logging.getLogger(__name__)


class StdioTransport:
    """Feeds lines from *reader* to a dispatcher and writes replies to *writer*.

    *reader* may be a binary or a text stream; it defaults to
    ``sys.stdin.buffer``. Blocking reads are moved off the event loop with
    :func:`asyncio.to_thread` so the same code works on stdin and on
    in-memory streams.
    """

    def __init__(
        self,
        dispatcher: ProtocolDispatcher,
        reader: IO[bytes] | IO[str] | None = None,
        writer: TextIO | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader if reader is not None else sys.stdin.buffer
        self._writer = writer if writer is not None else sys.stdout

    async def run(self) -> None:
        """Read until EOF."""
        logger.info("Starting MCP OSGi server on stdio")
        try:
            while True:
                line = await asyncio.to_thread(self._reader.readline)
                if not line:
                    break
                await self.process_line(line)
        except OSError:
            logger.exception("Error reading from stdin")
        logger.info("MCP OSGi server stopped")

    async def process_line(self, line: bytes | str) -> None:
        """Handle a single input line, writing at most one reply line."""
        if not line.strip():
            return
        reply = await self._dispatcher.handle_raw(line)
        if reply is not None:
            self._write(reply.decode("utf-8"))

    def _write(self, payload: str) -> None:
        try:
            self._writer.write(payload + "\n")
            self._writer.flush()
        except OSError:
            logger.exception("Error writing response to stdout")


def run_stdio(dispatcher: ProtocolDispatcher) -> None:
    """Serve *dispatcher* on the process's stdin/stdout until EOF."""
    asyncio.run(StdioTransport(dispatcher).run())
