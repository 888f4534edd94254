"""Stdio transport — newline-delimited JSON-RPC over stdin/stdout.

Each inbound line is one message; each response is written as one line.
Lines are read as raw bytes, so input that is not UTF-8 reaches the
dispatcher and is answered with a parse error.  Blank lines are skipped.
Every message is charged to the same caller key, since a stdio peer is a
single local process.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import IO, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from dicegate.protocol.dispatcher import GatewayDispatcher

logger = logging.getLogger(__name__)


class StdioServer:
    """Serve a :class:`GatewayDispatcher` over line-framed streams.

    *stdin* may be binary or text; it defaults to ``sys.stdin.buffer``.

    Uses ``loop.run_in_executor(None, readline)`` so a blocking read does not
    stall the event loop.
    """

    def __init__(
        self,
        dispatcher: GatewayDispatcher,
        *,
        caller_key: str = "stdio",
        stdin: IO[bytes] | TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._caller_key = caller_key
        self._stdin = stdin if stdin is not None else getattr(sys.stdin, "buffer", sys.stdin)
        self._stdout = stdout or sys.stdout

    async def serve(self) -> int:
        """Process lines until EOF; return the number of messages answered."""
        loop = asyncio.get_running_loop()
        handled = 0
        logger.info("Serving on stdio as caller %r", self._caller_key)
        while True:
            line: bytes | str = await loop.run_in_executor(None, self._stdin.readline)
            if not line:
                break
            if not line.strip():
                continue
            response = await self._dispatcher.handle(line, self._caller_key)
            if not self._write(response.to_wire()):
                break
            handled += 1
        logger.info("stdin closed after %d message(s)", handled)
        return handled

    def _write(self, obj: dict[str, object]) -> bool:
        try:
            self._stdout.write(json.dumps(obj, ensure_ascii=False) + "\n")
            self._stdout.flush()
        except BrokenPipeError:
            logger.info("stdout closed by peer; stopping")
            return False
        return True
