"""Plateau de jeu vu par l'agent: tuiles terrestres et adjacences.

Seule la surface de requête utile à l'encodage est exposée:
- énumération stable des tuiles terrestres (ordre défini par le plateau)
- numéro de dé de chaque tuile (0 pour le désert)
- tuiles adjacentes à chaque sommet (géométrie pointy-top, coordonnées cube)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from catan_offload.engine.rules import CLAY, ORE, SHEEP, WHEAT, WOOD

DESERT: str = "DESERT"
SEA: str = "SEA"


@dataclass(frozen=True)
class Tile:
    tile_id: int
    resource: str
    number: int | None
    vertices: Tuple[int, ...] = ()

    @property
    def is_land(self) -> bool:
        return self.resource != SEA


@dataclass(frozen=True)
class Vertex:
    vertex_id: int
    adjacent_tiles: Tuple[int, ...]


class Board:
    """Représentation immuable du plateau interrogée par l'encodeur."""

    # Ressources + coordonnées (spirale autour du désert)
    _TILE_LAYOUT: List[Tuple[int, str, Tuple[int, int, int]]] = [
        (0, DESERT, (0, 0, 0)),
        (1, ORE, (1, -1, 0)),
        (2, WHEAT, (1, 0, -1)),
        (3, SHEEP, (0, 1, -1)),
        (4, CLAY, (-1, 1, 0)),
        (5, WOOD, (-1, 0, 1)),
        (6, WHEAT, (0, -1, 1)),
        (7, WOOD, (2, -1, -1)),
        (8, CLAY, (2, 0, -2)),
        (9, SHEEP, (1, 1, -2)),
        (10, ORE, (0, 2, -2)),
        (11, WHEAT, (-1, 2, -1)),
        (12, WOOD, (-2, 2, 0)),
        (13, CLAY, (-2, 1, 1)),
        (14, SHEEP, (-2, 0, 2)),
        (15, WOOD, (-1, -1, 2)),
        (16, WHEAT, (0, -2, 2)),
        (17, SHEEP, (1, -2, 1)),
        (18, ORE, (2, -2, 0)),
    ]

    # Numéros de dé des tuiles 1..18, dans l'ordre de la spirale
    _DICE_SEQUENCE: Tuple[int, ...] = (5, 2, 6, 3, 8, 10, 9, 12, 11, 4, 8, 10, 9, 4, 5, 6, 3, 11)

    _SQRT3: float = math.sqrt(3.0)
    _ROUND_PRECISION = 6
    _VERTEX_OFFSETS: Tuple[Tuple[float, float], ...] = tuple(
        (math.cos(math.radians(30 + 60 * k)), math.sin(math.radians(30 + 60 * k)))
        for k in range(6)
    )

    def __init__(self, tiles: Dict[int, Tile], vertices: Dict[int, Vertex]) -> None:
        self.tiles: Dict[int, Tile] = tiles
        self.vertices: Dict[int, Vertex] = vertices

    # -- API requête --
    def land_tile_ids(self) -> Tuple[int, ...]:
        """Énumération stable des tuiles terrestres (index 0..N-1)."""

        return tuple(tile_id for tile_id in sorted(self.tiles) if self.tiles[tile_id].is_land)

    def land_tile_count(self) -> int:
        return len(self.land_tile_ids())

    def number_on_tile(self, tile_id: int) -> int:
        """Numéro de dé de la tuile, 0 si elle n'en porte pas (désert, mer)."""

        tile = self.tiles.get(tile_id)
        if tile is None or tile.number is None:
            return 0
        return tile.number

    def adjacent_tiles(self, vertex_id: int) -> Tuple[int, ...]:
        """Tuiles touchées par un sommet; vide si le sommet est inconnu."""

        vertex = self.vertices.get(vertex_id)
        if vertex is None:
            return ()
        return vertex.adjacent_tiles

    # -- Construction du plateau --
    @classmethod
    def standard(cls) -> "Board":
        numbers = dict(enumerate(cls._DICE_SEQUENCE, start=1))
        return cls.from_layout(cls._TILE_LAYOUT, numbers)

    @classmethod
    def from_layout(
        cls,
        layout: Iterable[Tuple[int, str, Tuple[int, int, int]]],
        numbers: Dict[int, int],
    ) -> "Board":
        """Construit un plateau et indexe ses sommets de manière déterministe.

        Args:
            layout: triplets (tile_id, ressource, coordonnées cube).
            numbers: numéro de dé par tile_id (les tuiles absentes n'en portent pas).
        """

        layout = list(layout)
        tile_vertex_coords: Dict[int, Tuple[Tuple[float, float], ...]] = {}
        vertex_tiles: Dict[Tuple[float, float], set[int]] = {}

        def axial_to_pixel(q: int, r: int) -> Tuple[float, float]:
            x = cls._SQRT3 * (q + r / 2)
            y = 1.5 * r
            return x, y

        def round_coord(value: float) -> float:
            return round(value, cls._ROUND_PRECISION)

        for tile_id, _, cube in layout:
            x, _, z = cube
            cx, cy = axial_to_pixel(x, z)
            corners: List[Tuple[float, float]] = []
            for dx, dy in cls._VERTEX_OFFSETS:
                coord = (round_coord(cx + dx), round_coord(cy + dy))
                corners.append(coord)
                vertex_tiles.setdefault(coord, set()).add(tile_id)
            tile_vertex_coords[tile_id] = tuple(corners)

        # Indexation déterministe
        vertex_coord_to_id = {
            coord: idx for idx, coord in enumerate(sorted(vertex_tiles))
        }

        vertices: Dict[int, Vertex] = {
            vid: Vertex(
                vertex_id=vid,
                adjacent_tiles=tuple(sorted(vertex_tiles[coord])),
            )
            for coord, vid in vertex_coord_to_id.items()
        }

        tiles: Dict[int, Tile] = {}
        for tile_id, resource, _ in layout:
            tiles[tile_id] = Tile(
                tile_id=tile_id,
                resource=resource,
                number=numbers.get(tile_id),
                vertices=tuple(vertex_coord_to_id[c] for c in tile_vertex_coords[tile_id]),
            )

        return cls(tiles=tiles, vertices=vertices)


__all__ = [
    "Board",
    "Tile",
    "Vertex",
    "DESERT",
    "SEA",
]
