"""Weighted plugin registry — a static catalog overlaid with enable/weight settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from revision_diff.models.plugin import PluginDescriptor, PluginSetting

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

T = TypeVar("T")


class PluginNotFoundError(KeyError):
    """Raised when a plugin id is not in the catalog."""


@dataclass(frozen=True)
class PluginDefinition(Generic[T]):
    """A registered plugin implementation."""

    id: str
    label: str
    factory: Callable[..., T]
    weight: int = 0
    description: str = ""
    field_types: tuple[str, ...] = ()


def build_catalog(definitions: Iterable[PluginDefinition[T]]) -> dict[str, PluginDefinition[T]]:
    """Key definitions by id, rejecting duplicates."""
    catalog: dict[str, PluginDefinition[T]] = {}
    for definition in definitions:
        if definition.id in catalog:
            raise ValueError(f"Duplicate plugin id: {definition.id}")
        catalog[definition.id] = definition
    return catalog


class PluginRegistry(Generic[T]):
    """Answer which plugins are usable, in what order, and which is the default.

    The settings snapshot is read once at construction; build a new registry to
    observe changed settings. Configured ids missing from the catalog are
    skipped rather than treated as errors, since stored settings and the
    installed catalog can drift apart.
    """

    def __init__(
        self,
        catalog: Mapping[str, PluginDefinition[T]],
        settings: Mapping[str, PluginSetting],
    ) -> None:
        self._catalog = dict(catalog)
        self._settings = dict(settings)

    @classmethod
    def with_defaults(cls, catalog: Mapping[str, PluginDefinition[T]]) -> PluginRegistry[T]:
        """Registry with every catalog plugin enabled at its declared weight."""
        settings = {
            plugin_id: PluginSetting(enabled=True, weight=definition.weight)
            for plugin_id, definition in catalog.items()
        }
        return cls(catalog, settings)

    @property
    def catalog(self) -> dict[str, PluginDefinition[T]]:
        return dict(self._catalog)

    def descriptors(self) -> list[PluginDescriptor]:
        """Every configured catalog plugin, enabled or not, sorted by weight."""
        descriptors = [
            PluginDescriptor(
                id=plugin_id,
                label=self._catalog[plugin_id].label,
                weight=setting.weight,
                enabled=setting.enabled,
            )
            for plugin_id, setting in self._settings.items()
            if plugin_id in self._catalog
        ]
        # sorted() is stable, so equal weights keep their configured order.
        return sorted(descriptors, key=lambda descriptor: descriptor.weight)

    def list_enabled(self) -> list[PluginDescriptor]:
        return [descriptor for descriptor in self.descriptors() if descriptor.enabled]

    def options(self) -> dict[str, str]:
        """Ordered mapping of enabled plugin id to label."""
        return {descriptor.id: descriptor.label for descriptor in self.list_enabled()}

    def default_id(self) -> str | None:
        enabled = self.list_enabled()
        return enabled[0].id if enabled else None

    def unknown_ids(self) -> list[str]:
        """Configured plugin ids with no registered implementation."""
        return [plugin_id for plugin_id in self._settings if plugin_id not in self._catalog]

    def get(self, plugin_id: str) -> PluginDefinition[T]:
        try:
            return self._catalog[plugin_id]
        except KeyError:
            raise PluginNotFoundError(plugin_id) from None

    def create(self, plugin_id: str, **kwargs: Any) -> T:
        """Instantiate a plugin through its registered factory."""
        definition = self.get(plugin_id)
        return definition.factory(plugin_id=plugin_id, **kwargs)
