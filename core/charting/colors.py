"""Categorical color assignment for chart series.

Color schemes are declared in `color_schemes.yaml`. A namespace owns the
name-to-color assignments for every chart instance so a series keeps its color
across re-renders of the same chart.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from django.conf import settings

logger = logging.getLogger(__name__)

COLOR_SCHEMES_PATH = Path(__file__).with_name("color_schemes.yaml")
DEFAULT_MAX_INSTANCES = 1000


@dataclass(frozen=True, slots=True)
class ColorScheme:
    """A named, ordered list of categorical colors."""

    id: str
    label: str
    colors: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ColorSchemeRegistry:
    """Color schemes keyed by id, plus the fallback scheme id."""

    schemes: dict[str, ColorScheme]
    default_id: str

    def get(self, scheme_id: str | None) -> ColorScheme:
        """Return the scheme for `scheme_id`, falling back to the default."""

        if scheme_id and scheme_id in self.schemes:
            return self.schemes[scheme_id]
        if scheme_id:
            logger.warning("Unknown color scheme %r; using %r.", scheme_id, self.default_id)
        return self.schemes[self.default_id]


def load_color_schemes(path: Path = COLOR_SCHEMES_PATH) -> ColorSchemeRegistry:
    """Load color schemes from a YAML document.

    Args:
        path: YAML file with a `default` scheme id and a `schemes` mapping.

    Returns:
        ColorSchemeRegistry built from the file.

    Raises:
        ValueError: When the document has no schemes or the default is missing.
    """

    payload: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    raw_schemes = payload.get("schemes") or {}
    schemes = {
        scheme_id: ColorScheme(
            id=scheme_id,
            label=str(entry.get("label") or scheme_id),
            colors=tuple(str(color) for color in entry.get("colors") or ()),
        )
        for scheme_id, entry in raw_schemes.items()
    }
    schemes = {scheme_id: scheme for scheme_id, scheme in schemes.items() if scheme.colors}
    if not schemes:
        raise ValueError(f"No color schemes defined in {path}.")

    default_id = str(payload.get("default") or next(iter(schemes)))
    if default_id not in schemes:
        raise ValueError(f"Default color scheme {default_id!r} is not defined in {path}.")
    return ColorSchemeRegistry(schemes=schemes, default_id=default_id)


@dataclass(frozen=True, slots=True)
class CategoricalColorScale:
    """Map series names to colors for one scheme within a namespace."""

    scheme: ColorScheme
    namespace: CategoricalColorNamespace

    def __call__(self, name: str, instance_id: int | None = None) -> str:
        return self.namespace.assign(self.scheme, name, instance_id)


@dataclass(slots=True)
class CategoricalColorNamespace:
    """Owns stable name-to-color assignments keyed by chart instance.

    Assignments for at most `max_instances` (scheme, instance) pairs are kept;
    the least recently used pair is evicted first. Access is serialized so
    concurrent requests never hand out the same next color twice.

    Args:
        registry: Available color schemes.
        max_instances: Upper bound on remembered (scheme, instance) pairs.
    """

    registry: ColorSchemeRegistry
    max_instances: int = DEFAULT_MAX_INSTANCES
    _assignments: OrderedDict[tuple[str, int | None], dict[str, str]] = field(default_factory=OrderedDict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def get_scale(self, scheme_id: str | None = None) -> CategoricalColorScale:
        """Return a color scale for a scheme id (unknown ids use the default)."""

        return CategoricalColorScale(scheme=self.registry.get(scheme_id), namespace=self)

    def assign(self, scheme: ColorScheme, name: str, instance_id: int | None) -> str:
        """Return the color for `name`, assigning the next free color once."""

        key = (scheme.id, instance_id)
        with self._lock:
            assigned = self._assignments.get(key)
            if assigned is None:
                assigned = self._assignments[key] = {}
                while len(self._assignments) > max(self.max_instances, 1):
                    evicted, _ = self._assignments.popitem(last=False)
                    logger.debug("Evicted color assignments for %r.", evicted)
            else:
                self._assignments.move_to_end(key)
            color = assigned.get(name)
            if color is None:
                color = scheme.colors[len(assigned) % len(scheme.colors)]
                assigned[name] = color
            return color

    def instance_count(self) -> int:
        """Return the number of remembered (scheme, instance) pairs."""

        with self._lock:
            return len(self._assignments)

    def reset(self, instance_id: int | None = None) -> None:
        """Forget assignments for one chart instance."""

        with self._lock:
            for key in [key for key in self._assignments if key[1] == instance_id]:
                del self._assignments[key]


@lru_cache(maxsize=1)
def default_color_namespace() -> CategoricalColorNamespace:
    """Return the process-wide namespace backed by the bundled schemes."""

    max_instances = getattr(settings, "BUBBLE_CHART_COLOR_INSTANCES", DEFAULT_MAX_INSTANCES)
    return CategoricalColorNamespace(registry=load_color_schemes(), max_instances=max_instances)
