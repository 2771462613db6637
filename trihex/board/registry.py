from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from trihex.config import settings

if TYPE_CHECKING:
    from trihex.board.protocol import OracleFactory

logger = logging.getLogger(__name__)


class OracleRegistry:
    """Registers rules-oracle factories by variant id.

    Each game session asks the registry for a factory and owns the oracle it
    creates; the registry itself never holds an oracle instance.
    """

    def __init__(self) -> None:
        self._factories: dict[str, OracleFactory] = {}

    def register(self, factory: OracleFactory) -> None:
        variant_id = factory.variant_id
        if variant_id in self._factories:
            raise ValueError(f"Variant '{variant_id}' already registered")
        self._factories[variant_id] = factory

    def get(self, variant_id: str | None = None) -> OracleFactory:
        """Factory for ``variant_id``, or for the configured default variant."""
        variant_id = variant_id or settings.default_variant
        if variant_id not in self._factories:
            raise KeyError(f"Unknown variant: {variant_id}")
        return self._factories[variant_id]

    def list_variants(self) -> list[str]:
        return sorted(self._factories)

    def load(self, path: str) -> OracleFactory:
        """Import and register a factory given as ``"package.module:attribute"``.

        A class attribute is instantiated with no arguments.
        """
        module_name, sep, attr = path.partition(":")
        if not sep or not module_name or not attr:
            raise ValueError(f"Oracle factory path must look like 'module:attr', got {path!r}")

        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
        if isinstance(factory, type):
            factory = factory()

        self.register(factory)
        logger.info(f"Registered oracle factory '{factory.variant_id}' from {path}")
        return factory
