import argparse
import sys

from echo_protocol.const import DEFAULT_HOST, DEFAULT_PORT, BUFFER_SIZE, validate_port
from echo_protocol.errors import TransportError
from echo_protocol.log import configure_logging
from .echo_server import AsyncEchoServer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="start-server", description="UDP echo server")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="increase output verbosity")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="decrease output verbosity")

    parser.add_argument("-H", "--host", default=DEFAULT_HOST,
                        help="service IP address")
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT,
                        help="service port")
    parser.add_argument("-b", "--buffer-size", type=int, default=BUFFER_SIZE,
                        help="receive buffer size in bytes")

    args = parser.parse_args(argv)
    try:
        validate_port(args.port)
    except ValueError as e:
        parser.error(str(e))
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        server = AsyncEchoServer(host=args.host, port=args.port, buffer_size=args.buffer_size)
    except TransportError as e:
        print(f"Exception: {e}", file=sys.stderr)
        return 1

    # Corre en primer plano hasta recibir SIGINT/SIGTERM/SIGQUIT
    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
