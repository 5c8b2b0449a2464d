#!/usr/bin/env python3
"""
Cliente de prueba de carga contra un servidor de eco ya levantado.
"""

import argparse
import sys

from echo_protocol.const import DEFAULT_HOST, DEFAULT_PORT, ECHO_REPEAT, validate_port
from echo_protocol.log import configure_logging
from .load_test import LoadTestHarness
from .output import SynchronizedOutput


def add_client_arguments(parser: argparse.ArgumentParser) -> None:
    """Agrega los flags comunes de la prueba de carga a un parser."""
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="increase output verbosity")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="decrease output verbosity")

    parser.add_argument("-H", "--host", metavar="ADDR", default=DEFAULT_HOST,
                        help="server IP address")
    parser.add_argument("-p", "--port", metavar="PORT", type=int, default=DEFAULT_PORT,
                        help="server port")
    parser.add_argument("-t", "--threads", metavar="N", type=int, default=None,
                        help="worker threads (default: one per CPU)")
    parser.add_argument("-n", "--count", metavar="N", type=int, default=ECHO_REPEAT,
                        help="echos per message size")
    parser.add_argument("--timeout", metavar="SECONDS", type=float, default=None,
                        help="max wait for each reply (default: wait forever)")


def check_client_arguments(parser: argparse.ArgumentParser, args) -> None:
    try:
        validate_port(args.port)
    except ValueError as e:
        parser.error(str(e))
    if args.threads is not None and args.threads < 1:
        parser.error("--threads debe ser mayor o igual a 1")
    if args.count < 0:
        parser.error("--count debe ser mayor o igual a 0")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="start-client",
        description="Load test a UDP echo server"
    )
    add_client_arguments(parser)
    args = parser.parse_args(argv)
    check_client_arguments(parser, args)
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    harness = LoadTestHarness(
        SynchronizedOutput(sys.stdout),
        host=args.host,
        port=args.port,
        repeat=args.count,
        workers=args.threads,
        timeout=args.timeout,
    )
    results = harness.run()
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
