"""Niribar daemon - the event loop."""

from __future__ import annotations

import signal
import sys
from typing import TYPE_CHECKING, Any

from .ansi import LogStyles, colorize, should_colorize
from .config import Configuration
from .config_loader import ConfigLoader
from .ipc import get_socket_path, open_event_stream_with_retry, read_events
from .logging_setup import get_logger
from .models import ExitCode, NiribarError
from .projector import project
from .reconciler import Reconciler
from .schema import NIRIBAR_CONFIG_SCHEMA
from .sink import JsonSink

if TYPE_CHECKING:
    from collections.abc import AsyncIterable

    from .events import Event

__all__ = ["Niribar", "run_daemon"]

STRICT_MODES: dict[str, bool | None] = {"auto": None, "always": True, "never": False}


class Niribar:
    """Main app object.

    Owns the reconciler (and through it the flat model) and the sink.
    """

    def __init__(self, config: Configuration | None = None, sink: JsonSink | None = None) -> None:
        self.log = get_logger()
        self.config = config if config is not None else Configuration({}, logger=self.log, schema=NIRIBAR_CONFIG_SCHEMA)
        self.reconciler = Reconciler(log=get_logger("reconciler"))
        self.projector_log = get_logger("projector")
        self.sink = sink or JsonSink(
            indent=2 if self.config.get_bool("pretty") else None,
            deduplicate=self.config.get_bool("deduplicate"),
        )
        strict_mode = self.config.get_str("strict_projection", "auto")
        if strict_mode not in STRICT_MODES:
            self.log.warning("Invalid strict_projection %r, using 'auto'", strict_mode)
            strict_mode = "auto"
        self.strict = STRICT_MODES[strict_mode]
        self.colored_log = should_colorize()

    def log_event(self, event: Event) -> None:
        """Log an incoming event."""
        if self.colored_log:
            self.log.debug(colorize(repr(event), *LogStyles.EVENT))
        else:
            self.log.debug("%r", event)

    def process(self, event: Event) -> bool:
        """Apply one event and emit the new projection.

        Args:
            event: the event to process

        Returns:
            False if the document was skipped by the sink

        Raises:
            ReferentialIntegrityError: if the event or the resulting model breaks referential integrity
        """
        self.log_event(event)
        self.reconciler.apply(event)
        tree = project(self.reconciler.state, strict=self.strict, log=self.projector_log)
        return self.sink.emit(tree)

    async def run(self, events: AsyncIterable[Event]) -> None:
        """Process every event until the stream ends.

        Args:
            events: the event source
        """
        async for event in events:
            self.process(event)


async def run_daemon(config_filename: str = "", overrides: dict[str, Any] | None = None) -> ExitCode:
    """Run the daemon until the niri event stream ends.

    Args:
        config_filename: Optional configuration file path
        overrides: values taking precedence over the configuration file

    Raises:
        NiribarError: on configuration problems
        ReferentialIntegrityError: when the mirrored state becomes inconsistent
    """
    log = get_logger()
    config = await ConfigLoader(log).load(config_filename)
    config.update(overrides or {})

    try:
        path = get_socket_path(config.get_str("socket"))
    except NiribarError as e:
        log.critical("%s", e)
        return ExitCode.ENV_ERROR

    signal.signal(signal.SIGTERM, lambda *_: sys.exit(0))

    result = await open_event_stream_with_retry(path, log, max_retry=config.get_int("connect_retries"))
    if result[0] is None:
        log.critical("Failed to open niri event stream: %s", result[1])
        return ExitCode.CONNECTION_ERROR
    reader, writer = result

    manager = Niribar(config)
    manager.log.debug("[ initialized ]".center(80, "="))
    try:
        await manager.run(read_events(reader, get_logger("ipc")))
    finally:
        writer.close()
        await writer.wait_closed()
    return ExitCode.SUCCESS
