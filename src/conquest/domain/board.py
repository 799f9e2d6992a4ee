"""Board queries over the territory/continent arena.

All helpers iterate ``game.territories`` in insertion order, which is the
order the topology declared them.  CPU strategies rely on that order for
their tie-breaks.
"""

from __future__ import annotations

from conquest.domain.errors import NotFoundError
from conquest.domain.models import Continent, Game, PlayerID, Territory


def get_territory(game: Game, territory_key: str) -> Territory:
    """Return the territory or raise :class:`NotFoundError`."""

    territory = game.territories.get(territory_key)
    if territory is None:
        raise NotFoundError(f"Territory not found: {territory_key}")
    return territory


def owned_territories(game: Game, player_id: PlayerID | None) -> list[Territory]:
    if player_id is None:
        return []
    return [t for t in game.territories.values() if t.owner_id == player_id]


def territory_count(game: Game, player_id: PlayerID | None) -> int:
    return len(owned_territories(game, player_id))


def total_armies(game: Game, player_id: PlayerID | None) -> int:
    return sum(t.armies for t in owned_territories(game, player_id))


def enemy_neighbors(game: Game, territory: Territory, player_id: PlayerID) -> list[Territory]:
    """Adjacent territories not owned by ``player_id`` (unowned ones included)."""

    return [
        other
        for other in game.territories.values()
        if not other.is_owned_by(player_id) and territory.is_neighbor_of(other.key)
    ]


def has_enemy_neighbor(game: Game, territory: Territory, player_id: PlayerID) -> bool:
    return any(
        not other.is_owned_by(player_id) and territory.is_neighbor_of(other.key)
        for other in game.territories.values()
    )


def attack_capable_territories(game: Game, player_id: PlayerID) -> list[Territory]:
    """Owned territories with more than one army and an enemy neighbour."""

    return [
        t
        for t in owned_territories(game, player_id)
        if t.armies > 1 and has_enemy_neighbor(game, t, player_id)
    ]


def border_territories(game: Game, player_id: PlayerID) -> list[Territory]:
    return [t for t in owned_territories(game, player_id) if has_enemy_neighbor(game, t, player_id)]


def interior_territories(game: Game, player_id: PlayerID) -> list[Territory]:
    """Owned territories with spare armies and no enemy neighbour."""

    return [
        t
        for t in owned_territories(game, player_id)
        if t.armies > 1 and not has_enemy_neighbor(game, t, player_id)
    ]


def continent_territories(game: Game, continent: Continent) -> list[Territory]:
    return [game.territories[key] for key in continent.territory_keys if key in game.territories]


def is_continent_controlled(game: Game, continent: Continent, player_id: PlayerID | None) -> bool:
    """True when every member territory is owned by ``player_id``.

    An empty continent is never controlled.
    """

    members = continent_territories(game, continent)
    if not members or player_id is None:
        return False
    return all(t.is_owned_by(player_id) for t in members)


def controlled_continents(game: Game, player_id: PlayerID | None) -> list[Continent]:
    return [c for c in game.continents.values() if is_continent_controlled(game, c, player_id)]
