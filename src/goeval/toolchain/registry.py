"""Toolchain registry for string-based toolchain lookup.

Configuration names the toolchain as a string (``toolchain: "go"``),
which is resolved here to a concrete BaseToolchain instance.

Example:
    >>> from goeval.toolchain import get_toolchain, list_toolchains
    >>> toolchain = get_toolchain("go")
    >>> "go" in list_toolchains()
    True

"""

import logging
from typing import TYPE_CHECKING

from goeval.core.config import EvalConfig
from goeval.core.exceptions import ConfigError

if TYPE_CHECKING:
    from goeval.toolchain.base import BaseToolchain

logger = logging.getLogger(__name__)

# Registry mapping: name -> toolchain class
_REGISTRY: dict[str, type["BaseToolchain"]] = {}


def _init_default_toolchains() -> None:
    """Populate the registry with built-in toolchains on first access."""
    from goeval.toolchain.go import GoToolchain

    _REGISTRY.update({"go": GoToolchain})
    logger.debug(
        "Initialized toolchain registry with %d toolchains: %s",
        len(_REGISTRY),
        ", ".join(sorted(_REGISTRY.keys())),
    )


def get_toolchain(name: str, config: EvalConfig | None = None) -> "BaseToolchain":
    """Get a toolchain instance by name.

    Args:
        name: Toolchain name (e.g., "go").
        config: Config passed to the toolchain constructor.

    Returns:
        New instance of the requested toolchain.

    Raises:
        ConfigError: If the name is empty or not registered.
            Error message includes the list of available toolchains.

    """
    if not _REGISTRY:
        _init_default_toolchains()

    if not name or not name.strip():
        available = ", ".join(sorted(_REGISTRY.keys()))
        raise ConfigError(f"Toolchain name cannot be empty. Available: {available}")

    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY.keys()))
        logger.debug("Toolchain lookup failed: '%s' not found", name)
        raise ConfigError(f"Unknown toolchain: '{name}'. Available: {available}")

    toolchain_class = _REGISTRY[name]
    logger.debug("Instantiating toolchain: %s -> %s", name, toolchain_class.__name__)
    return toolchain_class(config)


def list_toolchains() -> frozenset[str]:
    """List all registered toolchain names."""
    if not _REGISTRY:
        _init_default_toolchains()
    return frozenset(_REGISTRY.keys())


def is_valid_toolchain(name: str) -> bool:
    """Check if a toolchain name is registered."""
    if not _REGISTRY:
        _init_default_toolchains()
    return name in _REGISTRY
