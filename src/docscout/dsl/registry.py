"""Extension registry: named operations that callers bolt onto builders.

Builders keep a fixed set of operations they handle directly. Anything else
is looked up here by name, so applications can add shorthand such as
``published()`` or ``near(lat, lon)`` without subclassing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from docscout.core.exceptions import UnknownOperationError

logger = logging.getLogger(__name__)

Extension = Callable[..., Any]


class ExtensionRegistry:
    """Registry mapping operation names to extension functions.

    Each extension is called with the builder as its first positional
    argument followed by the caller's arguments.

    Example:
        >>> registry = ExtensionRegistry("fragment")
        >>> registry.register("published", lambda b: b.term("status", "published"))
        >>> registry.get("published")(builder)
    """

    def __init__(self, owner: str) -> None:
        self._owner = owner
        self._extensions: dict[str, Extension] = {}

    def register(self, name: str, func: Extension) -> None:
        """Register an extension function.

        Args:
            name: Operation name the extension answers to.
            func: Callable receiving the builder and the call arguments.
        """
        if name in self._extensions:
            logger.warning("Overwriting existing %s extension: %s", self._owner, name)
        self._extensions[name] = func
        logger.debug("Registered %s extension: %s", self._owner, name)

    def unregister(self, name: str) -> None:
        self._extensions.pop(name, None)

    def get(self, name: str) -> Extension:
        """Get a registered extension by name.

        Raises:
            UnknownOperationError: If nothing is registered under this name.
        """
        if name not in self._extensions:
            raise UnknownOperationError(
                f"No {self._owner} operation named '{name}'. "
                f"Registered extensions: {list(self._extensions.keys())}"
            )
        return self._extensions[name]

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    @property
    def names(self) -> list[str]:
        """List all registered extension names."""
        return list(self._extensions.keys())
