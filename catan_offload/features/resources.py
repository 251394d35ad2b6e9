"""Encodage des ressources en vecteur ordonné à 5 composantes."""

from __future__ import annotations

from typing import Dict, Mapping, NamedTuple

import numpy as np

from catan_offload.engine.rules import RESOURCE_ORDER

_RESOURCE_TO_INDEX: Dict[str, int] = {
    resource: idx for idx, resource in enumerate(RESOURCE_ORDER)
}


class ResourceVector(NamedTuple):
    """Quantités dans l'ordre fixe argile, bois, mouton, minerai, blé."""

    clay: int = 0
    wood: int = 0
    sheep: int = 0
    ore: int = 0
    wheat: int = 0

    @property
    def total(self) -> int:
        return sum(self)

    def to_array(self) -> np.ndarray:
        return np.array(self, dtype=np.int64)


def encode_resources(holdings: Mapping[str, int] | None) -> ResourceVector:
    """Encode un inventaire (ou un lot d'échange) en ResourceVector.

    Les ressources absentes valent 0, les clés inconnues sont ignorées et
    les quantités négatives ramenées à 0.
    """

    counts = [0] * len(RESOURCE_ORDER)
    if holdings:
        for resource, amount in holdings.items():
            index = _RESOURCE_TO_INDEX.get(resource)
            if index is None:
                continue
            counts[index] = max(0, int(amount))
    return ResourceVector(*counts)


__all__ = ["ResourceVector", "encode_resources"]
