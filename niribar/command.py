"""Niribar - niri state for status bars (command line entry point)."""

import asyncio
import sys

from .constants import VERSION
from .daemon import run_daemon
from .logging_setup import get_logger, init_logger
from .models import ExitCode, NiribarError, ReferentialIntegrityError

__all__ = ["main"]

USAGE = """Usage: niribar [options]

Prints one JSON document per niri event on stdout.

Options:
  --config FILE     use FILE instead of the default config.toml
  --socket PATH     niri socket (defaults to $NIRI_SOCKET)
  --debug LOGFILE   enable debug logs, also written to LOGFILE
  --pretty          indent the JSON documents (debugging only: breaks
                    the one document per line output bars expect)
  --dedup           skip documents identical to the previous one
  --version         print the version and exit
  --help            print this help and exit
"""


def use_param(txt: str) -> str:
    """Check if parameter `txt` is in sys.argv.

    if found, removes it from sys.argv & returns the argument value
    """
    v = ""
    if txt in sys.argv:
        i = sys.argv.index(txt)
        if i + 1 >= len(sys.argv):
            print(f"Missing value for {txt}\n\n{USAGE}", file=sys.stderr)
            sys.exit(ExitCode.USAGE_ERROR)
        v = sys.argv[i + 1]
        del sys.argv[i : i + 2]
    return v


def use_flag(txt: str) -> bool:
    """Check if flag `txt` is in sys.argv, removing it."""
    if txt in sys.argv:
        sys.argv.remove(txt)
        return True
    return False


def main() -> None:
    """Run the command."""
    if use_flag("--help") or use_flag("-h"):
        print(USAGE)
        sys.exit(ExitCode.SUCCESS)
    if use_flag("--version"):
        print(VERSION)
        sys.exit(ExitCode.SUCCESS)

    debug_flag = use_param("--debug")
    if debug_flag:
        init_logger(filename=debug_flag, force_debug=True)
    else:
        init_logger()
    log = get_logger("startup")

    config_override = use_param("--config")
    overrides: dict[str, str | bool] = {}
    socket_path = use_param("--socket")
    if socket_path:
        overrides["socket"] = socket_path
    if use_flag("--pretty"):
        overrides["pretty"] = True
    if use_flag("--dedup"):
        overrides["deduplicate"] = True

    if len(sys.argv) > 1:
        log.critical("Unknown arguments: %s", " ".join(sys.argv[1:]))
        print(USAGE, file=sys.stderr)
        sys.exit(ExitCode.USAGE_ERROR)

    try:
        exit_code = asyncio.run(run_daemon(config_override, overrides))
    except KeyboardInterrupt:
        exit_code = ExitCode.SUCCESS
    except ReferentialIntegrityError as e:
        log.critical("Inconsistent compositor state, aborting: %s", e)
        exit_code = ExitCode.INTEGRITY_ERROR
    except NiribarError as e:
        log.critical("Command failed: %s", e)
        exit_code = ExitCode.USAGE_ERROR
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
