"""Perspective ego-centrée : renumérotation des sièges relative au joueur qui décide.

Le joueur qui décide occupe toujours la position 0. Les adversaires assis
avant lui sont décalés d'un cran, ceux assis après gardent leur numéro, ce
qui les place sans collision dans les positions 1..max_players-1.
"""

from __future__ import annotations

from typing import Tuple

SELF_POSITION = 0


def _check_seats(self_slot: int, max_players: int) -> None:
    if max_players < 2:
        raise ValueError(f"Au moins deux sièges sont nécessaires: {max_players}")
    if not 0 <= self_slot < max_players:
        raise ValueError(f"Siège du joueur hors limites: {self_slot} (max {max_players})")


def relative_slot(absolute_slot: int, self_slot: int, max_players: int) -> int:
    """Position relative d'un siège absolu dans les segments par joueur.

    Args:
        absolute_slot: siège attribué par la partie.
        self_slot: siège du joueur qui décide.
        max_players: nombre de sièges de la partie.

    Returns:
        0 pour le joueur lui-même, une position dans [1, max_players) sinon.
    """

    _check_seats(self_slot, max_players)
    if not 0 <= absolute_slot < max_players:
        raise ValueError(f"Siège hors limites: {absolute_slot} (max {max_players})")
    if absolute_slot == self_slot:
        return SELF_POSITION
    if absolute_slot < self_slot:
        return absolute_slot + 1
    return absolute_slot


def seating_order(self_slot: int, max_players: int) -> Tuple[int, ...]:
    """Sièges absolus rangés par position relative (le joueur en tête)."""

    _check_seats(self_slot, max_players)
    order = [0] * max_players
    for absolute in range(max_players):
        order[relative_slot(absolute, self_slot, max_players)] = absolute
    return tuple(order)


__all__ = ["SELF_POSITION", "relative_slot", "seating_order"]
