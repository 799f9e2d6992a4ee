"""Static map definitions and the loader that reads them from JSON files."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from conquest.domain.errors import NotFoundError
from conquest.domain.models import Continent, Game, Territory

logger = logging.getLogger(__name__)

BUNDLED_MAPS_DIR = Path(__file__).parent / "maps"


class _MapModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class TerritoryDefinition(_MapModel):
    """A single territory with its neighbour keys and screen position."""

    key: str
    name: str
    neighbors: list[str] = Field(default_factory=list)
    map_x: float = 0.0
    map_y: float = 0.0


class AreaDefinition(_MapModel):
    """A region (continent on the classic map) granting a control bonus."""

    key: str
    name: str
    bonus_armies: int = Field(ge=0)
    color: str | None = None
    territories: list[TerritoryDefinition] = Field(default_factory=list)


class MapDefinition(_MapModel):
    """Root definition of a playable map."""

    id: str
    name: str
    description: str | None = None
    author: str | None = None
    min_players: int = Field(default=2, ge=2)
    max_players: int = Field(default=6, le=6)
    areas: list[AreaDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_territory_keys(self) -> MapDefinition:
        keys: set[str] = set()
        for territory in self.all_territories():
            if territory.key in keys:
                raise ValueError(f"duplicate territory key '{territory.key}'")
            keys.add(territory.key)
        for territory in self.all_territories():
            unknown = [key for key in territory.neighbors if key not in keys]
            if unknown:
                raise ValueError(
                    f"territory '{territory.key}' has unknown neighbours: {', '.join(unknown)}"
                )
        return self

    def all_territories(self) -> list[TerritoryDefinition]:
        return [territory for area in self.areas for territory in area.territories]

    @property
    def territory_count(self) -> int:
        return len(self.all_territories())


def build_board(game: Game, definition: MapDefinition) -> None:
    """Replace the game's board with fresh, unowned territories from ``definition``."""

    game.territories = {}
    game.continents = {}
    for area in definition.areas:
        game.continents[area.key] = Continent(
            key=area.key,
            name=area.name,
            bonus_armies=area.bonus_armies,
            territory_keys=[t.key for t in area.territories],
            color=area.color,
        )
        for territory in area.territories:
            game.territories[territory.key] = Territory(
                key=territory.key,
                name=territory.name,
                continent_key=area.key,
                neighbor_keys=list(territory.neighbors),
                map_x=territory.map_x,
                map_y=territory.map_y,
            )
    game.map_id = definition.id


class JsonTopologyLoader:
    """Load map definitions from the bundled folder and an optional extra folder.

    Maps found in ``extra_dir`` replace bundled maps with the same id.
    Malformed files are skipped with a warning.
    """

    def __init__(self, extra_dir: Path | None = None, *, bundled_dir: Path = BUNDLED_MAPS_DIR):
        self._maps: dict[str, MapDefinition] = {}
        self._load_dir(bundled_dir)
        if extra_dir is not None and extra_dir.is_dir():
            self._load_dir(extra_dir)
        logger.info("loaded %d map(s): %s", len(self._maps), ", ".join(sorted(self._maps)))

    def _load_dir(self, directory: Path) -> None:
        for path in sorted(directory.glob("*.json")):
            try:
                definition = MapDefinition.model_validate_json(path.read_bytes())
            except (OSError, ValidationError) as exc:
                logger.warning("skipping map file %s: %s", path, exc)
                continue
            self._maps[definition.id] = definition

    def get_map(self, map_id: str) -> MapDefinition:
        try:
            return self._maps[map_id]
        except KeyError:
            raise NotFoundError(f"Map '{map_id}' not found") from None

    def available_maps(self) -> list[MapDefinition]:
        return [self._maps[map_id] for map_id in sorted(self._maps)]
