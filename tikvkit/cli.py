"""Command-line options shared by client programs: PD endpoints and TLS files."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import Config

DEFAULT_PD = "localhost:2379"


@dataclass
class CommandArgs:
    """Parsed command-line options."""

    pd: list[str] = field(default_factory=lambda: [DEFAULT_PD])
    ca: Path | None = None
    cert: Path | None = None
    key: Path | None = None

    def to_config(self) -> Config:
        """Build a Config, enabling TLS when CA, certificate and key are all given."""
        if self.ca is not None and self.cert is not None and self.key is not None:
            return Config().with_security(self.ca, self.cert, self.key)
        return Config()


def _build_parser(app_name: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=app_name)
    parser.add_argument(
        "--pd",
        "--pd-endpoint",
        "--pd-endpoints",
        dest="pd",
        metavar="PD_URL",
        action="append",
        help="Sets PD endpoints. Uses `,` to separate multiple PDs",
    )
    parser.add_argument(
        "--ca",
        metavar="CA_PATH",
        help="Sets the CA. Must be used with --cert and --key",
    )
    parser.add_argument(
        "--cert",
        metavar="CERT_PATH",
        help="Sets the certificate. Must be used with --ca and --key",
    )
    parser.add_argument(
        "--key",
        "--private-key",
        dest="key",
        metavar="KEY_PATH",
        help="Sets the private key. Must be used with --ca and --cert",
    )
    return parser


def parse_args(app_name: str, argv: Sequence[str] | None = None) -> CommandArgs:
    """Parse options; exits with a usage error if the security options are incomplete."""
    parser = _build_parser(app_name)
    ns = parser.parse_args(argv)

    # CA, cert and key require each other in a cycle so none can be left out.
    for given, needed in (("ca", "cert"), ("cert", "key"), ("key", "ca")):
        if getattr(ns, given) is not None and getattr(ns, needed) is None:
            parser.error(f"--{given} requires --{needed}")

    if ns.pd:
        pd = [part for value in ns.pd for part in value.split(",")]
    else:
        pd = [DEFAULT_PD]

    return CommandArgs(
        pd=pd,
        ca=Path(ns.ca) if ns.ca is not None else None,
        cert=Path(ns.cert) if ns.cert is not None else None,
        key=Path(ns.key) if ns.key is not None else None,
    )