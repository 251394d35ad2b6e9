"""Point d'accès de référence pour le protocole de décision.

Héberge n'importe quel callable Python derrière le protocole tramé : utile
pour les tests et pour brancher une politique locale pendant le
développement. La politique reçoit l'étiquette et les sections d'entiers du
message, et rend un entier (réponse `robber`) ou une ligne de texte
(réponse `trade`).
"""

from __future__ import annotations

import logging
import socketserver
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List, Tuple, Union

from catan_offload.protocol.errors import WireFormatError
from catan_offload.protocol.wire import (
    encode_int_reply,
    encode_line_reply,
    read_framed_message,
    split_message,
)

logger = logging.getLogger(__name__)

Policy = Callable[[str, List[List[int]]], Union[int, str]]


class _DecisionHandler(socketserver.StreamRequestHandler):
    server: "DecisionServer"

    def handle(self) -> None:
        try:
            message = read_framed_message(self.rfile)
            tag, sections = split_message(message)
        except (EOFError, WireFormatError) as exc:
            logger.warning("Requête rejetée: %s", exc)
            return

        self.server.record(message)
        reply = self.server.policy(tag, sections)
        if isinstance(reply, bool) or not isinstance(reply, (int, str)):
            raise TypeError(f"La politique doit rendre int ou str, pas {type(reply)!r}")
        if isinstance(reply, int):
            self.wfile.write(encode_int_reply(reply))
        else:
            self.wfile.write(encode_line_reply(reply))
        self.wfile.flush()


class DecisionServer(socketserver.ThreadingTCPServer):
    """Serveur TCP servant une politique, une connexion par requête."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, address: Tuple[str, int], policy: Policy) -> None:
        super().__init__(address, _DecisionHandler)
        self.policy = policy
        self._lock = threading.Lock()
        self._messages: List[str] = []

    @property
    def endpoint(self) -> Tuple[str, int]:
        host, port = self.server_address[:2]
        return str(host), int(port)

    @property
    def messages(self) -> Tuple[str, ...]:
        """Requêtes reçues, dans l'ordre d'arrivée."""

        with self._lock:
            return tuple(self._messages)

    def record(self, message: str) -> None:
        with self._lock:
            self._messages.append(message)


@contextmanager
def serve_in_background(
    policy: Policy,
    *,
    host: str = "127.0.0.1",
    port: int = 0,
) -> Iterator[DecisionServer]:
    """Démarre un `DecisionServer` dans un thread et l'arrête en sortie.

    `port=0` choisit un port libre; lire `server.endpoint` pour le connaître.
    """

    server = DecisionServer((host, port), policy)
    thread = threading.Thread(target=server.serve_forever, name="decision-server", daemon=True)
    thread.start()
    logger.info("Service de décision à l'écoute sur %s:%s", *server.endpoint)
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join()


__all__ = ["DecisionServer", "Policy", "serve_in_background"]
