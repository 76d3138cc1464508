#!/usr/bin/env python3
"""Run a mock OpenID Connect provider from the command line.

Usage:
    oidcmock                              # http://localhost:8000, realm master
    oidcmock --port 8443 --tls --cert c.pem --key k.pem
    oidcmock --realm test --algorithm ES256
"""

import argparse
import logging
import signal
import threading
from collections.abc import Sequence
from types import FrameType

from oidcmock.core.logging import configure_logging
from oidcmock.core.settings import PORT_DEFAULT, REALM_DEFAULT, ServerSettings
from oidcmock.crypto.types import Algorithm
from oidcmock.mock import OidcMock

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="oidcmock",
        description="Mock OpenID Connect provider serving JWKS and discovery.",
    )
    parser.add_argument("-p", "--port", type=int, default=PORT_DEFAULT)
    parser.add_argument("-s", "--tls", action="store_true", help="serve via HTTPS")
    parser.add_argument("-r", "--realm", default=REALM_DEFAULT)
    parser.add_argument(
        "-a",
        "--algorithm",
        type=Algorithm,
        choices=list(Algorithm),
        default=Algorithm.RS256,
    )
    parser.add_argument("--host", default="localhost", help="advertised hostname")
    parser.add_argument("--cert", help="PEM certificate file for --tls")
    parser.add_argument("--key", help="PEM private key file for --tls")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> ServerSettings:
    return ServerSettings(
        hostname=args.host,
        port=args.port,
        realm=args.realm,
        tls=args.tls,
        algorithm=args.algorithm,
        tls_certfile=args.cert,
        tls_keyfile=args.key,
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    mock = OidcMock(build_settings(args))
    stopped = threading.Event()

    def _on_signal(signum: int, _frame: FrameType | None) -> None:
        logger.info("Received signal %d, shutting down", signum)
        stopped.set()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)
    with mock:
        logger.info(
            "Issuer %s, JWKS %s",
            mock.issuer(),
            mock.discovery().jwks_uri,
        )
        stopped.wait()


if __name__ == "__main__":
    main()
