"""
Filter Registry and Manager.

This module provides a centralized dispatch table from FilterKind to the
function that implements it. It enables registration, lookup, and execution
of filters, together with metadata used by presentation layers.

Classes:
    FilterRegistry: Registry for filter functions

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_filters: Register all built-in filters
"""

from typing import Any, Callable, Dict, List, Optional
import logging
import threading

from PE_Libs.constants import TAG_LIVE_PREVIEW, TAG_PARAMETRIC
from PE_Libs.ImageEditingLib.image_models import FilterKind, FilterParameters, RasterBuffer

logger = logging.getLogger(__name__)

# Type alias for filter function
FilterFunction = Callable[[RasterBuffer, FilterParameters], RasterBuffer]


class FilterRegistry:
    """
    Registry for filter functions.

    Example:
        >>> registry = FilterRegistry()
        >>> registry.register(FilterKind.SEPIA, run_sepia, tags=["color"])
        >>> result = registry.execute(FilterKind.SEPIA, buffer, FilterParameters())
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._filters: Dict[FilterKind, FilterFunction] = {}
        self._metadata: Dict[FilterKind, Dict[str, Any]] = {}

    def register(
        self,
        kind: FilterKind,
        func: FilterFunction,
        description: str = "",
        uses_parameters: Optional[List[str]] = None,
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a filter function.

        Args:
            kind: The FilterKind this function implements
            func: Callable accepting (source, params) and returning a new RasterBuffer
            description: Human-readable description of the filter
            uses_parameters: FilterParameters fields the filter reads
            tags: Optional list of tags for categorization (e.g., ["color", "live-preview"])

        Raises:
            ValueError: If kind is not a FilterKind or func is not callable
            RuntimeError: If kind is already registered
        """
        if not isinstance(kind, FilterKind):
            raise ValueError(f"kind must be a FilterKind, got {kind!r}")

        if not callable(func):
            raise ValueError(f"func must be callable, got {type(func)}")

        if kind in self._filters:
            raise RuntimeError(
                f"Filter '{kind.value}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._filters[kind] = func
        self._metadata[kind] = {
            "description": str(description),
            "uses_parameters": list(uses_parameters) if uses_parameters else [],
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered filter: {kind.value}")

    def unregister(self, kind: FilterKind) -> bool:
        """
        Unregister a filter.

        Returns:
            True if unregistered, False if kind was not registered
        """
        if kind in self._filters:
            del self._filters[kind]
            del self._metadata[kind]
            logger.debug(f"Unregistered filter: {kind.value}")
            return True

        return False

    def get_filter(self, kind: FilterKind) -> FilterFunction:
        """
        Get the function for a filter kind.

        Raises:
            KeyError: If kind is not registered
        """
        if kind not in self._filters:
            available = ", ".join(k.value for k in self.list_kinds())
            raise KeyError(
                f"No filter registered for '{getattr(kind, 'value', kind)}'. "
                f"Available filters: {available}"
            )

        return self._filters[kind]

    def has_filter(self, kind: FilterKind) -> bool:
        return kind in self._filters

    def execute(
        self,
        kind: FilterKind,
        source: RasterBuffer,
        params: FilterParameters,
    ) -> RasterBuffer:
        """
        Run a filter by looking up its function.

        Raises:
            KeyError: If kind is not registered
            Exception: Any exception raised by the filter
        """
        func = self.get_filter(kind)
        return func(source, params)

    def list_kinds(self) -> List[FilterKind]:
        """
        Get list of all registered filter kinds.

        Returns:
            Registered kinds sorted by value
        """
        return sorted(self._filters.keys(), key=lambda kind: kind.value)

    def get_metadata(self, kind: FilterKind) -> Dict[str, Any]:
        """
        Get metadata for a filter kind.

        Returns:
            Dictionary with description, uses_parameters, tags

        Raises:
            KeyError: If kind is not registered
        """
        if kind not in self._metadata:
            raise KeyError(f"No metadata for filter: {getattr(kind, 'value', kind)}")

        meta = self._metadata[kind]
        return {
            "description": meta["description"],
            "uses_parameters": list(meta["uses_parameters"]),
            "tags": list(meta["tags"]),
        }

    def get_all_metadata(self) -> Dict[FilterKind, Dict[str, Any]]:
        return {kind: self.get_metadata(kind) for kind in self._metadata}

    def filter_by_tag(self, tag: str) -> List[FilterKind]:
        """
        Get all filter kinds with a specific tag.

        Returns:
            Kinds carrying the tag, sorted by value
        """
        tag = str(tag).strip().lower()
        return sorted(
            [
                kind
                for kind, meta in self._metadata.items()
                if tag in [t.lower() for t in meta.get("tags", [])]
            ],
            key=lambda kind: kind.value,
        )

    def clear(self) -> None:
        """Clear all registered filters. Use with caution."""
        self._filters.clear()
        self._metadata.clear()
        logger.warning("Filter registry cleared")


# Global singleton registry
_default_registry: Optional[FilterRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> FilterRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in filters.
    """
    global _default_registry

    with _default_registry_lock:
        if _default_registry is None:
            registry = FilterRegistry()
            register_default_filters(registry)
            _default_registry = registry

    return _default_registry


def register_default_filters(registry: FilterRegistry) -> None:
    """
    Register all built-in filters.

    FilterKind.NONE is not registered; dispatch treats it
    as identity.

    Args:
        registry: The registry to register filters with
    """
    from PE_Libs.ImageEditingLib.filter_engine import (
        apply_brightness,
        apply_brightness_contrast,
        apply_contrast,
        apply_edge_detection,
        apply_gaussian_blur,
        apply_grayscale,
        apply_sepia,
    )

    registry.register(
        FilterKind.GRAYSCALE,
        lambda source, params: apply_grayscale(source),
        description="Luminosity grayscale (0.299 R + 0.587 G + 0.114 B)",
        tags=["color"],
    )

    registry.register(
        FilterKind.BRIGHTNESS,
        lambda source, params: apply_brightness(source, params.brightness),
        description="Add a constant to every color channel",
        uses_parameters=["brightness"],
        tags=["tone", TAG_PARAMETRIC],
    )

    registry.register(
        FilterKind.CONTRAST,
        lambda source, params: apply_contrast(source, params.contrast),
        description="Stretch or compress channels around mid-gray",
        uses_parameters=["contrast"],
        tags=["tone", TAG_PARAMETRIC],
    )

    registry.register(
        FilterKind.BRIGHTNESS_CONTRAST,
        lambda source, params: apply_brightness_contrast(
            source, params.brightness, params.contrast
        ),
        description="Contrast then brightness in a single pass",
        uses_parameters=["brightness", "contrast"],
        tags=["tone", TAG_PARAMETRIC, TAG_LIVE_PREVIEW],
    )

    registry.register(
        FilterKind.GAUSSIAN_BLUR,
        lambda source, params: apply_gaussian_blur(source, params.blur_radius),
        description="Gaussian blur approximated by three separable box blurs",
        uses_parameters=["blur_radius"],
        tags=["blur", TAG_PARAMETRIC, TAG_LIVE_PREVIEW],
    )

    registry.register(
        FilterKind.EDGE_DETECTION,
        lambda source, params: apply_edge_detection(source),
        description="Sobel gradient magnitude on the grayscale image",
        tags=["edge"],
    )

    registry.register(
        FilterKind.SEPIA,
        lambda source, params: apply_sepia(source),
        description="Warm sepia color matrix",
        tags=["color"],
    )

    logger.info("Registered default filters")
