"""File persistence for traits: one canonical JSON blob, written whole."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

from .config import StoreConfig
from .device import DeviceIdProvider
from .traits.overlay import Traits

logger = logging.getLogger("analytics_traits")


def _default_mode() -> int:
    # os.umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class TraitsStore:
    """Reads and writes a :class:`Traits` document at ``path``.

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers never see a half-written document.
    """

    def __init__(self, path: str | Path, indent: int | None = None):
        self.path = Path(path)
        self.indent = indent

    @classmethod
    def from_config(cls, cfg: StoreConfig) -> TraitsStore:
        return cls(cfg.path, indent=cfg.indent)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[Traits]:
        """Stored traits, or None if nothing has been saved yet.

        Raises:
            MalformedDocumentError: the file does not hold a JSON object.
        """
        if not self.path.exists():
            return None
        traits = Traits.parse(self.path.read_text(encoding="utf-8"))
        logger.debug(f"Loaded {len(traits.document)} traits from {self.path}")
        return traits

    def save(self, traits: Traits) -> None:
        """Write ``traits`` in full.

        The file keeps its current permissions; a new file gets the usual
        umask-based mode rather than the 0600 of a temporary file.
        """
        text = traits.serialize(indent=self.indent)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            mode = stat.S_IMODE(self.path.stat().st_mode)
        else:
            mode = _default_mode()
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.chmod(tmp, mode)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise
        logger.debug(f"Saved {len(traits.document)} traits to {self.path}")

    def load_or_create(self, device_id: DeviceIdProvider) -> Traits:
        """Stored traits, or new traits seeded from ``device_id`` on first run."""
        traits = self.load()
        if traits is not None:
            return traits
        traits = Traits.from_device(device_id)
        self.save(traits)
        logger.info(f"First run: seeded traits for device {traits.anonymous_id()}")
        return traits

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Removed stored traits at {self.path}")
