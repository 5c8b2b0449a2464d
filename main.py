#!/usr/bin/env python3
"""
Levanta el servidor de eco en un hilo de fondo, corre la prueba de carga
en primer plano y al terminar detiene el servidor con SIGINT.
"""

import argparse
import signal
import sys
import threading

from echo_client.load_test import LoadTestHarness
from echo_client.output import SynchronizedOutput
from echo_client.start_client import add_client_arguments, check_client_arguments
from echo_protocol.errors import TransportError
from echo_protocol.log import configure_logging
from echo_server.echo_server import AsyncEchoServer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="udp-echo", description="UDP echo server self test")
    add_client_arguments(parser)
    args = parser.parse_args(argv)
    check_client_arguments(parser, args)
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        server = AsyncEchoServer(host=args.host, port=args.port)
    except TransportError as e:
        print(f"Exception: {e}", file=sys.stderr)
        return 1

    server_thread = threading.Thread(target=server.run, name="EchoServer")
    server_thread.start()

    try:
        harness = LoadTestHarness(
            SynchronizedOutput(sys.stdout),
            host=args.host,
            port=server.address[1],
            repeat=args.count,
            workers=args.threads,
            timeout=args.timeout,
        )
        results = harness.run()
    finally:
        # Detener el servidor igual que desde afuera del proceso
        signal.raise_signal(signal.SIGINT)
        server_thread.join()
        server.close()

    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
