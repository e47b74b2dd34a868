"""Directory of registered extensions and their declared configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from layoutkit.registry.types import ExtensionConfig

logger = logging.getLogger(__name__)

__all__ = ["ExtensionDirectory"]


class ExtensionDirectory:
    """Insertion-ordered mapping of extension id -> ExtensionConfig.

    The first registration for an id wins; later ones are rejected.
    """

    def __init__(self) -> None:
        self._extensions: dict[str, ExtensionConfig] = {}

    def register(self, config: ExtensionConfig | Mapping[str, Any]) -> bool:
        """Add an extension. Returns False, without side effects, if rejected."""
        if not isinstance(config, ExtensionConfig):
            try:
                config = ExtensionConfig.model_validate(dict(config))
            except (ValidationError, TypeError, ValueError) as e:
                logger.warning("Rejected extension registration: %s", e)
                return False

        if config.id in self._extensions:
            logger.warning("Extension '%s' is already registered, ignoring", config.id)
            return False

        self._extensions[config.id] = config
        logger.info("Registered extension '%s' (%s)", config.id, config.name)
        return True

    def get(self, ext_id: str) -> ExtensionConfig | None:
        return self._extensions.get(ext_id)

    def list_all(self) -> dict[str, ExtensionConfig]:
        return dict(self._extensions)

    def __contains__(self, ext_id: object) -> bool:
        return ext_id in self._extensions

    def __len__(self) -> int:
        return len(self._extensions)

    def to_dict(self) -> dict[str, Any]:
        return {ext_id: config.model_dump(mode="json") for ext_id, config in self._extensions.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExtensionDirectory:
        directory = cls()
        for raw in data.values():
            try:
                config = ExtensionConfig.model_validate(raw)
            except ValidationError as e:
                logger.warning("Dropping invalid cached extension config: %s", e)
                continue
            directory._extensions[config.id] = config
        return directory
