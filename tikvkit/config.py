"""Client configuration: TLS file locations and request timeout."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import timedelta
from os import PathLike
from pathlib import Path

DEFAULT_REQUEST_TIMEOUT = timedelta(seconds=2)


@dataclass(frozen=True)
class Config:
    """Configuration shared by raw and transactional clients.

    Without the three security paths the connection is not protected by TLS.
    """

    ca_path: Path | None = None
    cert_path: Path | None = None
    key_path: Path | None = None
    timeout: timedelta = DEFAULT_REQUEST_TIMEOUT

    def with_security(
        self,
        ca_path: str | PathLike[str],
        cert_path: str | PathLike[str],
        key_path: str | PathLike[str],
    ) -> Config:
        """Return a copy using the given CA, certificate and private key files."""
        return dataclasses.replace(
            self, ca_path=Path(ca_path), cert_path=Path(cert_path), key_path=Path(key_path)
        )

    def with_timeout(self, timeout: timedelta) -> Config:
        """Return a copy with the given timeout for all requests."""
        return dataclasses.replace(self, timeout=timeout)