"""Topology Loader Protocol Interface."""

from typing import Protocol

from conquest.topology import MapDefinition


class ITopologyLoader(Protocol):
    """Protocol for fetching static map definitions."""

    def get_map(self, map_id: str) -> MapDefinition:
        """Return the map definition for ``map_id``.

        Raises:
            NotFoundError: if the map id is unknown
        """
        ...

    def available_maps(self) -> list[MapDefinition]:
        """Return every loaded map definition."""
        ...
