"""Atomic JSON file storage for billing collections."""

import json
import os
from pathlib import Path
import tempfile
from typing import Any

from unctico_billing.domain.errors import PersistenceError
from unctico_billing.infrastructure.encryption import AesGcmCipher
from unctico_billing.infrastructure.logging.logger import get_app_logger


class JsonFileStore:
    """Read and write JSON documents under a data directory.

    Each write goes to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new file.
    When a cipher is configured the file holds ``nonce || ciphertext``.
    """

    def __init__(
        self,
        data_dir: Path,
        cipher: AesGcmCipher | None = None,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            data_dir: Directory holding the collection files.
            cipher: Optional cipher for encryption at rest.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._data_dir = Path(data_dir)
        self._cipher = cipher
        self._logger = logger or get_app_logger()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def read(self, name: str, default: Any) -> Any:
        """Return the decoded document, or ``default`` if it does not exist.

        Raises:
            PersistenceError: When the file cannot be read or decoded.
        """
        path = self._data_dir / name
        if not path.exists():
            return default
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"Could not read {path}: {exc}") from exc
        if self._cipher is not None:
            raw = self._cipher.decrypt(raw)
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Corrupt data in {path}: {exc}") from exc

    def write(self, name: str, document: Any) -> None:
        """Atomically replace the file with the encoded document.

        Raises:
            PersistenceError: When the file cannot be written.
        """
        path = self._data_dir / name
        payload = json.dumps(document, indent=2).encode("utf-8")
        if self._cipher is not None:
            payload = self._cipher.encrypt(payload)
        tmp_name = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir,
                prefix=f".{name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            self._logger.error(f"Failed to write {path}: {exc}")
            raise PersistenceError(f"Could not write {path}: {exc}") from exc
        self._logger.debug(f"Wrote {path}")


__all__ = ["JsonFileStore"]
