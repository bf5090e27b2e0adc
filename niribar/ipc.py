"""Interact with niri using its socket."""

from __future__ import annotations

__all__ = [
    "get_socket_path",
    "open_event_stream",
    "open_event_stream_with_retry",
    "read_events",
]

import asyncio
import itertools
import json
import os
from typing import TYPE_CHECKING

from .constants import CONNECT_RETRY_DELAY, DEFAULT_CONNECT_RETRIES, EVENT_STREAM_REQUEST, NIRI_SOCKET_ENV, STREAM_LIMIT
from .events import Event, parse_event
from .models import NiribarError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from logging import Logger


def get_socket_path(override: str = "") -> str:
    """Return the niri socket path.

    Args:
        override: explicit path, takes precedence over $NIRI_SOCKET

    Raises:
        NiribarError: if no path is available
    """
    path = override or os.environ.get(NIRI_SOCKET_ENV, "")
    if not path:
        msg = f"{NIRI_SOCKET_ENV} is not set, is niri running ?"
        raise NiribarError(msg)
    return os.path.expanduser(path)


async def open_event_stream(path: str, logger: Logger) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Open a connection and switch it to event streaming.

    Args:
        path: the niri socket path
        logger: logger to use in case of error

    Raises:
        NiribarError: if the socket doesn't exist or niri refuses the request
    """
    try:
        reader, writer = await asyncio.open_unix_connection(path, limit=STREAM_LIMIT)
    except FileNotFoundError as e:
        logger.critical("niri socket not found! is it running ?")
        raise NiribarError(f"niri socket not found: {path}") from e

    writer.write(EVENT_STREAM_REQUEST.encode())
    await writer.drain()
    reply = (await reader.readline()).decode("utf-8", errors="replace")
    try:
        response = json.loads(reply)
    except json.JSONDecodeError:
        response = reply.strip()

    if response != {"Ok": "Handled"}:
        writer.close()
        await writer.wait_closed()
        error = response.get("Err", response) if isinstance(response, dict) else response
        logger.error("niri refused the event stream: %s", error)
        raise NiribarError(f"niri refused the event stream: {error}")
    logger.debug("Event stream opened on %s", path)
    return reader, writer


async def open_event_stream_with_retry(
    path: str,
    logger: Logger,
    max_retry: int = DEFAULT_CONNECT_RETRIES,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter] | tuple[None, BaseException]:
    """Obtain the event stream, retrying if it fails.

    If retry count is exhausted, returns (None, exception).

    Args:
        path: the niri socket path
        logger: logger to use in case of error
        max_retry: Maximum number of retries
    """
    err_count = itertools.count()
    while True:
        attempt = next(err_count)
        try:
            return await open_event_stream(path, logger)
        except (OSError, NiribarError) as e:
            if attempt >= max_retry:
                return None, e
            logger.warning("Connection to niri failed (%s), retrying...", e)
            await asyncio.sleep(CONNECT_RETRY_DELAY)


async def read_events(reader: asyncio.StreamReader, logger: Logger) -> AsyncIterator[Event]:
    """Yield the events read from the stream, until it ends.

    Args:
        reader: the event stream
        logger: logger used by the event parser
    """
    while True:
        try:
            data = await reader.readline()
        except ValueError:
            # line longer than STREAM_LIMIT, the reader already dropped it
            logger.exception("Event too large, skipped")
            continue
        if not data:
            logger.info("Event stream closed")
            return
        try:
            line = data.decode("utf-8")
        except UnicodeDecodeError:
            logger.exception("Invalid unicode while reading events")
            continue
        event = parse_event(line, log=logger)
        if event is not None:
            yield event
