"""Device identifiers used to seed anonymous traits on first run."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Callable

logger = logging.getLogger("analytics_traits")

# Any zero-argument callable returning an opaque, stable id string.
DeviceIdProvider = Callable[[], str]


def random_device_id() -> str:
    return str(uuid.uuid4())


class PersistentDeviceId:
    """Device id kept in a small file so it survives restarts.

    The first call generates an id with ``generate`` and writes it to
    ``path``; later calls (and later processes) read it back.
    """

    def __init__(self, path: str | Path, generate: DeviceIdProvider = random_device_id):
        self.path = Path(path)
        self.generate = generate

    def __call__(self) -> str:
        if self.path.exists():
            device_id = self.path.read_text(encoding="utf-8").strip()
            if device_id:
                return device_id
            logger.warning(f"Device id file {self.path} is empty, regenerating")

        return self.rotate()

    def rotate(self) -> str:
        """Replace the stored id with a newly generated one and return it."""
        device_id = self.generate()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(device_id, encoding="utf-8")
        logger.info(f"Generated device id, saved to {self.path}")
        return device_id
