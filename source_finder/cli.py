"""CLI interface for source-finder."""

import argparse
import json
import logging
import os
import signal
import sys
from contextlib import contextmanager
from typing import List, Optional

from . import __version__
from .cancellation import CancellationToken
from .config import ConfigError, default_config_path, load_config, select_providers
from .criteria import SourceCriteria
from .diagnostics import PendingWarning
from .finder import RunStatus, get_package_sources
from .sources import PackageSource, create_providers

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ABORTED = 130


def _format_source(source: PackageSource, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(source.to_dict(), sort_keys=True)
    flags = []
    if source.provider_name:
        flags.append(source.provider_name)
    if source.is_trusted:
        flags.append("trusted")
    suffix = f"  [{', '.join(flags)}]" if flags else ""
    return f"{source.name:<24} {source.location}{suffix}"


class OutputClosed(Exception):
    """Raised when stdout goes away mid-run (e.g. piped into ``head``)."""


@contextmanager
def _cancel_on_sigint(token: CancellationToken):
    """Turn Ctrl+C into a cooperative stop request for the duration of a query.

    The first Ctrl+C requests a stop and puts the previous handler back,
    so a second one interrupts a provider that is stuck mid-stream.
    """
    previous = None

    def _handler(signum, frame):
        print("Stopping after the current provider (Ctrl+C again to interrupt)...",
              file=sys.stderr)
        token.cancel()
        signal.signal(signal.SIGINT, _restorable(previous))

    installed = False
    try:
        previous = signal.signal(signal.SIGINT, _handler)
        installed = True
    except ValueError:
        # Not in the main thread; run without Ctrl+C handling.
        logger.debug("Cannot install SIGINT handler outside the main thread")
    try:
        yield
    finally:
        if installed:
            signal.signal(signal.SIGINT, _restorable(previous))


def _restorable(handler):
    # signal.signal() returns None for handlers installed outside Python.
    return signal.default_int_handler if handler is None else handler


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (AttributeError, OSError, ValueError) as exc:
        logger.debug("Could not redirect stdout to devnull: %s", exc)


def _load(args):
    config_path = args.config or default_config_path()
    return load_config(config_path)


def cmd_list(args):
    """List package sources matching the given name/location."""
    try:
        config = _load(args)
        selected = select_providers(config.providers, args.provider)
        providers = create_providers(selected)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    criteria = SourceCriteria.from_input(args.name, args.location)
    logger.debug("Querying %d provider(s) for %s", len(providers), criteria)

    def emit_source(source: PackageSource) -> None:
        try:
            print(_format_source(source, args.format), flush=True)
        except BrokenPipeError as exc:
            raise OutputClosed() from exc

    def emit_warning(warning: PendingWarning) -> None:
        print(f"WARNING: {warning.message}", file=sys.stderr)

    token = CancellationToken()
    try:
        with _cancel_on_sigint(token):
            status = get_package_sources(
                providers,
                criteria,
                on_source=emit_source,
                on_warning=emit_warning,
                token=token,
                check_between_sources=args.check_between_sources,
            )
    except OutputClosed:
        logger.debug("Output closed by reader; stopping")
        _silence_stdout()
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_ABORTED
    except Exception as e:
        print(f"Error fetching sources: {e}", file=sys.stderr)
        return EXIT_ERROR

    if status is RunStatus.ABORTED:
        print("Aborted.", file=sys.stderr)
        return EXIT_ABORTED
    return EXIT_OK


def cmd_providers(args):
    """List configured providers."""
    try:
        config = _load(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.format == "json":
        data = [{"name": p.name, "type": p.type} for p in config.providers]
        print(json.dumps(data, indent=2))
    else:
        print(f"Providers in {config.config_path} ({len(config.providers)} total):")
        for p in config.providers:
            print(f"  {p.name:<24} {p.type}")
    return EXIT_OK


def create_parser():
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="source-finder",
        description="Source Finder - list package sources known to configured providers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every source from every provider
  source-finder list

  # Sources named (or located at) 'internal'
  source-finder list internal

  # Sources at a location, from one provider, as JSON lines
  source-finder list --location https://pkgs.example.com/api --provider corp --format json

Exit codes:
  0    = Completed (warnings may have been printed)
  1    = Error (bad config, unknown provider, provider failure)
  130  = Aborted by Ctrl+C
"""
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="FILE",
                        help="Provider config file (default: $SOURCE_FINDER_CONFIG or sources.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    lst = subparsers.add_parser("list", help="List package sources")
    lst.add_argument("name", nargs="?", help="Source name (also matched against locations)")
    lst.add_argument("--location", help="Source location to look for")
    lst.add_argument("--provider", action="append", metavar="NAME",
                     help="Only query this provider (repeatable; order is kept)")
    lst.add_argument("--format", choices=["text", "json"], default="text")
    lst.add_argument("--check-between-sources", action="store_true",
                     help="Honor Ctrl+C between sources, not only between providers")

    prov = subparsers.add_parser("providers", help="List configured providers")
    prov.add_argument("--format", choices=["text", "json"], default="text")

    return parser


def main(argv: Optional[List[str]] = None):
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    handlers = {
        "list":      cmd_list,
        "providers": cmd_providers,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
