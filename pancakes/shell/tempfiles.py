from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TempFileWriter:
    """Writes blobs to fresh files in the platform temp directory.

    Files are never removed here; the caller owns cleanup.
    """

    prefix: str = "pancakes"
    directory: Path | None = None

    def write(self, data: bytes, suffix: str | None = None) -> Path:
        fd, name = tempfile.mkstemp(
            prefix=f"{self.prefix}-",
            suffix=f".{suffix.lstrip('.')}" if suffix else "",
            dir=self.directory,
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        path = Path(name)
        logger.debug("Wrote %d bytes to %s", len(data), path)
        return path
