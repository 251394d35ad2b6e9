"""Configuration du service de décision déporté."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from catan_offload.engine.rules import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT_SECONDS

ENV_PREFIX = "CATAN_OFFLOAD_"


class TileFallback(Enum):
    """Choix de tuile quand le service ne répond pas."""

    FIRST_TILE = "first_tile"  # index 0 sans condition
    HEURISTIC = "heuristic"  # heuristique locale


@dataclass(frozen=True)
class DecisionServiceConfig:
    """Point d'accès et délais d'un aller-retour.

    Args:
        host: hôte du service.
        port: port TCP du service.
        timeout: délai de lecture de la réponse, en secondes.
        connect_timeout: délai d'établissement de la connexion
            (par défaut identique à `timeout`).
        tile_fallback: politique de repli pour la décision de tuile.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    connect_timeout: float | None = None
    tile_fallback: TileFallback = TileFallback.FIRST_TILE

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host ne peut pas être vide")
        if not 0 < self.port < 65536:
            raise ValueError(f"Port invalide: {self.port}")
        if self.timeout <= 0:
            raise ValueError(f"timeout doit être positif: {self.timeout}")
        if self.connect_timeout is not None and self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout doit être positif: {self.connect_timeout}")

    @property
    def endpoint(self) -> tuple[str, int]:
        return self.host, self.port

    @property
    def effective_connect_timeout(self) -> float:
        return self.timeout if self.connect_timeout is None else self.connect_timeout

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DecisionServiceConfig":
        """Lit les variables `CATAN_OFFLOAD_*` (HOST, PORT, TIMEOUT,
        CONNECT_TIMEOUT, TILE_FALLBACK); les absentes gardent leur défaut."""

        env = os.environ if environ is None else environ

        def read(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value is not None and value.strip() else None

        kwargs: dict = {}
        host = read("HOST")
        if host is not None:
            kwargs["host"] = host
        try:
            port = read("PORT")
            if port is not None:
                kwargs["port"] = int(port)
            timeout = read("TIMEOUT")
            if timeout is not None:
                kwargs["timeout"] = float(timeout)
            connect_timeout = read("CONNECT_TIMEOUT")
            if connect_timeout is not None:
                kwargs["connect_timeout"] = float(connect_timeout)
            fallback = read("TILE_FALLBACK")
            if fallback is not None:
                kwargs["tile_fallback"] = TileFallback(fallback.lower())
        except ValueError as exc:
            raise ValueError(f"Configuration {ENV_PREFIX}* invalide: {exc}") from exc
        return cls(**kwargs)


__all__ = ["DecisionServiceConfig", "ENV_PREFIX", "TileFallback"]
