"""Client du service de décision déporté.

Chaque appel ouvre une connexion neuve, envoie une requête tramée, lit une
unique réponse puis ferme la connexion, quelle que soit l'issue. Aucune
erreur réseau ne remonte à l'appelant : l'échec est rendu sous forme d'un
`DecisionOutcome` sans réponse, à charge pour la stratégie d'appliquer son
repli. Pas de nouvelle tentative.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from catan_offload.config import DecisionServiceConfig
from catan_offload.protocol.errors import (
    DecisionConnectionError,
    DecisionProtocolError,
    DecisionServiceError,
    DecisionTimeout,
    WireFormatError,
)
from catan_offload.protocol.wire import frame_message, read_int_reply, read_line_reply

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[..., socket.socket]
Reply = Union[int, str]


class ReplyKind(Enum):
    INT = "INT"  # entier 4 octets big-endian
    LINE = "LINE"  # une ligne de texte


@dataclass(frozen=True)
class DecisionRequest:
    """Requête prête à l'envoi.

    Args:
        tag: type de décision (pour les journaux).
        message: ligne formatée par `format_message`.
        reply_kind: forme de la réponse attendue.
        reply_bound: pour une réponse entière, borne exclusive de l'index valide.
    """

    tag: str
    message: str
    reply_kind: ReplyKind
    reply_bound: int | None = None


@dataclass(frozen=True)
class DecisionOutcome:
    """Issue d'un aller-retour: une réponse, ou l'erreur qui l'a empêchée."""

    reply: Optional[Reply]
    error: Optional[DecisionServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DecisionClient:
    """Aller-retour borné avec le service de décision."""

    def __init__(
        self,
        config: DecisionServiceConfig | None = None,
        *,
        connection_factory: ConnectionFactory = socket.create_connection,
    ) -> None:
        self._config = config or DecisionServiceConfig()
        self._connection_factory = connection_factory

    @property
    def config(self) -> DecisionServiceConfig:
        return self._config

    def decide(self, request: DecisionRequest) -> DecisionOutcome:
        """Envoie la requête et rend la réponse décodée ou l'échec."""

        logger.debug("%s request = %s", request.tag, request.message)
        try:
            reply = self._round_trip(request)
        except DecisionServiceError as exc:
            logger.warning(
                "Connexion avec le service de décision perdue (%s): %s",
                request.tag,
                exc,
            )
            return DecisionOutcome(reply=None, error=exc)
        logger.debug("%s reply = %r", request.tag, reply)
        return DecisionOutcome(reply=reply)

    def _round_trip(self, request: DecisionRequest) -> Reply:
        endpoint: Tuple[str, int] = self._config.endpoint
        try:
            payload = frame_message(request.message)
            with self._connection_factory(
                endpoint, timeout=self._config.effective_connect_timeout
            ) as connection:
                connection.settimeout(self._config.timeout)
                connection.sendall(payload)
                with connection.makefile("rb") as stream:
                    if request.reply_kind is ReplyKind.INT:
                        reply: Reply = read_int_reply(stream)
                    else:
                        reply = read_line_reply(stream)
        except socket.timeout as exc:
            raise DecisionTimeout(
                f"Pas de réponse de {endpoint} en {self._config.timeout}s"
            ) from exc
        except (EOFError, WireFormatError) as exc:
            raise DecisionProtocolError(f"Réponse illisible de {endpoint}: {exc}") from exc
        except OSError as exc:
            raise DecisionConnectionError(f"Service {endpoint} injoignable: {exc}") from exc

        if request.reply_kind is ReplyKind.INT and request.reply_bound is not None:
            if not 0 <= int(reply) < request.reply_bound:
                raise DecisionProtocolError(
                    f"Index {reply} hors de [0, {request.reply_bound})"
                )
        return reply


__all__ = [
    "DecisionClient",
    "DecisionOutcome",
    "DecisionRequest",
    "ReplyKind",
]
