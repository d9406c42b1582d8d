"""Server settings -- reads from ``.env`` file and environment."""

from __future__ import annotations

import logging
import os
import re
from typing import ClassVar

from ..util.env_file import EnvFile

_TOKEN_KEY_RE = re.compile(r"[^A-Z0-9_]")


class Settings:

    _PREFIX: ClassVar[str] = "SLASHHOOK_"

    def __init__(self) -> None:
        self.env = EnvFile(os.getenv("DOTENV_PATH") or ".env")
        self.reload()

    def reload(self) -> None:
        e = self._read

        self.host: str = e("HOST") or "0.0.0.0"
        raw_port = e("PORT") or "8080"
        try:
            self.port: int = int(raw_port)
        except ValueError:
            raise ValueError(f"{self._PREFIX}PORT must be an integer, got {raw_port!r}") from None

        self.tls_cert_file: str = e("TLS_CERT")
        self.tls_key_file: str = e("TLS_KEY")
        self.log_level: str = (e("LOG_LEVEL") or "INFO").upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            self.log_level = "INFO"

    @property
    def tls_enabled(self) -> bool:
        return bool(self.tls_cert_file and self.tls_key_file)

    def token_for(self, command: str) -> str:
        """Return the configured token for *command* (``/deploy-app`` ->
        ``SLASHHOOK_TOKEN_DEPLOY_APP``), or ``""`` if unset."""
        name = command.lstrip("/").upper().replace("-", "_")
        return self._read("TOKEN_" + _TOKEN_KEY_RE.sub("_", name))

    def _read(self, key: str) -> str:
        full = self._PREFIX + key
        return self.env.read(full) or os.getenv(full, "")
