"""Identify workflow: the one place identity fields change."""

from __future__ import annotations

import logging
from typing import Optional

from .config import TraitsConfig
from .device import DeviceIdProvider, PersistentDeviceId
from .store import TraitsStore
from .traits.identity import IdentityWriter
from .traits.overlay import Traits

logger = logging.getLogger("analytics_traits")


class IdentifyWorkflow:
    """Owns the current traits and applies identify calls to them.

    Every change is saved through ``store`` before returning.
    """

    def __init__(self, store: TraitsStore, device_id: DeviceIdProvider):
        self.store = store
        self.device_id = device_id
        self._traits = store.load_or_create(device_id)
        self._identity = IdentityWriter.grant(self._traits)

    @classmethod
    def from_config(cls, cfg: TraitsConfig) -> IdentifyWorkflow:
        return cls(TraitsStore.from_config(cfg.store), PersistentDeviceId(cfg.device.id_path))

    @property
    def traits(self) -> Traits:
        return self._traits

    def identify(self, user_id: str, traits: Optional[Traits] = None) -> Traits:
        """Tie the current traits to ``user_id`` and merge any new ``traits``.

        Identity keys inside ``traits`` are ignored; ``user_id`` wins. The
        anonymous id is left untouched so the visitor history stays linked.
        """
        previous = self._traits.user_id()
        self._identity.put_user_id(user_id)

        if traits is not None:
            self._traits.merge(traits)

        self.store.save(self._traits)
        if previous != user_id:
            logger.info(f"Identified user {user_id} (was {previous})")
        return self._traits

    def reset(self, device_id: Optional[DeviceIdProvider] = None) -> Traits:
        """Forget stored traits and start over from a fresh device id.

        Without ``device_id``, a persistent id is rotated so the new
        anonymous visitor is not linked to the previous one.
        """
        if device_id is not None:
            self.device_id = device_id
        elif isinstance(self.device_id, PersistentDeviceId):
            self.device_id.rotate()
        self.store.clear()
        self._traits = self.store.load_or_create(self.device_id)
        self._identity = IdentityWriter.grant(self._traits)
        logger.info("Traits reset")
        return self._traits
