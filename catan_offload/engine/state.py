"""Vue de l'état de jeu interrogée par l'agent.

Le moteur de règles reste un collaborateur externe : ce module ne décrit que
la surface de requête dont l'encodeur a besoin (pièces posées, ressources,
cartes de développement, points de victoire, position du voleur). Les
accès par numéro de joueur passent par des méthodes validées contre
l'ensemble des sièges connus.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from catan_offload.engine.board import Board
from catan_offload.engine.rules import MAX_PLAYERS, RESOURCE_ORDER


class UnknownPlayerError(ValueError):
    """Numéro de joueur hors de l'ensemble des sièges de la partie."""


class PieceKind(Enum):
    SETTLEMENT = "SETTLEMENT"
    CITY = "CITY"


@dataclass(frozen=True)
class Piece:
    """Colonie ou ville posée sur un sommet."""

    kind: PieceKind
    owner: int
    vertex_id: int


@dataclass
class Player:
    """Représentation d'un joueur assis."""

    player_number: int
    name: str
    resources: Dict[str, int] = field(
        default_factory=lambda: {resource: 0 for resource in RESOURCE_ORDER}
    )
    settlements: List[int] = field(default_factory=list)  # vertex_ids
    cities: List[int] = field(default_factory=list)  # vertex_ids
    unplayed_dev_cards: int = 0
    victory_points: int = 0  # points publics
    hidden_victory_points: int = 0  # cartes point de victoire non révélées

    @property
    def total_victory_points(self) -> int:
        return self.victory_points + self.hidden_victory_points

    @property
    def resource_total(self) -> int:
        return sum(max(0, amount) for amount in self.resources.values())


@dataclass
class GameState:
    """Instantané de partie à `max_players` sièges (certains peuvent être vides)."""

    board: Board
    players: List[Player]
    max_players: int = MAX_PLAYERS
    robber_tile_id: int = 0

    def __post_init__(self) -> None:
        if self.max_players < 2:
            raise ValueError(f"Il faut au moins deux sièges: {self.max_players}")
        seen: set[int] = set()
        for player in self.players:
            number = player.player_number
            if not 0 <= number < self.max_players:
                raise UnknownPlayerError(
                    f"Joueur {number} hors des sièges [0, {self.max_players})"
                )
            if number in seen:
                raise ValueError(f"Siège {number} occupé deux fois")
            seen.add(number)

    @classmethod
    def new_game(
        cls,
        player_names: Sequence[str] | None = None,
        *,
        max_players: int = MAX_PLAYERS,
        board: Board | None = None,
    ) -> "GameState":
        """Crée une partie sur le plateau standard, voleur sur le désert.

        Args:
            player_names: Noms des joueurs assis aux sièges 0..k-1
                (par défaut un joueur par siège).
            max_players: Nombre de sièges de la partie.
            board: Plateau à utiliser (plateau standard sinon).
        """

        if player_names is None:
            player_names = [f"Player {i}" for i in range(max_players)]
        board = board or Board.standard()
        robber_tile_id = next(
            (tile_id for tile_id, tile in board.tiles.items() if tile.number is None and tile.is_land),
            board.land_tile_ids()[0] if board.land_tile_ids() else 0,
        )
        players = [
            Player(player_number=i, name=name) for i, name in enumerate(player_names)
        ]
        return cls(
            board=board,
            players=players,
            max_players=max_players,
            robber_tile_id=robber_tile_id,
        )

    # -- Sièges --------------------------------------------------------------

    def player_numbers(self) -> Tuple[int, ...]:
        """Sièges occupés, triés."""

        return tuple(sorted(player.player_number for player in self.players))

    def player(self, slot: int) -> Player | None:
        """Joueur assis au siège `slot` (None si le siège est vide)."""

        self._check_slot(slot)
        for player in self.players:
            if player.player_number == slot:
                return player
        return None

    def _check_slot(self, slot: int) -> None:
        if not isinstance(slot, int) or not 0 <= slot < self.max_players:
            raise UnknownPlayerError(
                f"Siège inconnu: {slot!r} (sièges valides: 0..{self.max_players - 1})"
            )

    # -- Capacités par joueur --------------------------------------------------

    def resources_of(self, slot: int) -> Dict[str, int]:
        player = self.player(slot)
        if player is None:
            return {}
        return dict(player.resources)

    def resource_total_of(self, slot: int) -> int:
        player = self.player(slot)
        return 0 if player is None else player.resource_total

    def development_card_count_of(self, slot: int) -> int:
        player = self.player(slot)
        return 0 if player is None else player.unplayed_dev_cards

    def public_victory_points_of(self, slot: int) -> int:
        player = self.player(slot)
        return 0 if player is None else player.victory_points

    def total_victory_points_of(self, slot: int) -> int:
        player = self.player(slot)
        return 0 if player is None else player.total_victory_points

    # -- Pièces ----------------------------------------------------------------

    def settlements(self) -> List[Piece]:
        return [
            Piece(kind=PieceKind.SETTLEMENT, owner=player.player_number, vertex_id=vertex_id)
            for player in self.players
            for vertex_id in player.settlements
        ]

    def cities(self) -> List[Piece]:
        return [
            Piece(kind=PieceKind.CITY, owner=player.player_number, vertex_id=vertex_id)
            for player in self.players
            for vertex_id in player.cities
        ]

    def adjacent_tiles_of(self, piece: Piece) -> Tuple[int, ...]:
        return self.board.adjacent_tiles(piece.vertex_id)


__all__ = [
    "GameState",
    "Piece",
    "PieceKind",
    "Player",
    "UnknownPlayerError",
]
