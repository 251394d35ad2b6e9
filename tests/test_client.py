"""Tests du client de décision contre un service local."""

from __future__ import annotations

import socket
from typing import List

import pytest

from catan_offload.config import DecisionServiceConfig
from catan_offload.protocol.client import DecisionClient, DecisionRequest, ReplyKind
from catan_offload.protocol.errors import (
    DecisionConnectionError,
    DecisionProtocolError,
    DecisionTimeout,
)
from catan_offload.protocol.server import serve_in_background
from offload_test_utils import unused_port


def _config(endpoint, *, timeout: float = 5.0) -> DecisionServiceConfig:
    host, port = endpoint
    return DecisionServiceConfig(host=host, port=port, timeout=timeout)


class _TrackingFactory:
    """Fabrique de connexions qui garde une référence à chaque socket ouverte."""

    def __init__(self) -> None:
        self.sockets: List[socket.socket] = []

    def __call__(self, address, timeout=None):
        connection = socket.create_connection(address, timeout=timeout)
        self.sockets.append(connection)
        return connection


ROBBER_REQUEST = DecisionRequest(
    tag="robber", message="robber|1,2|3", reply_kind=ReplyKind.INT, reply_bound=19
)
TRADE_REQUEST = DecisionRequest(tag="trade", message="trade|1|2", reply_kind=ReplyKind.LINE)


def test_int_reply_round_trip():
    with serve_in_background(lambda tag, sections: 5) as server:
        outcome = DecisionClient(_config(server.endpoint)).decide(ROBBER_REQUEST)

        assert outcome.ok
        assert outcome.reply == 5
        assert server.messages == ("robber|1,2|3",)


def test_line_reply_round_trip():
    with serve_in_background(lambda tag, sections: "1") as server:
        outcome = DecisionClient(_config(server.endpoint)).decide(TRADE_REQUEST)

        assert outcome.ok
        assert outcome.reply == "1"


def test_policy_receives_tag_and_sections():
    received = []

    def policy(tag, sections):
        received.append((tag, sections))
        return 0

    with serve_in_background(policy) as server:
        DecisionClient(_config(server.endpoint)).decide(ROBBER_REQUEST)

    assert received == [("robber", [[1, 2], [3]])]


def test_one_connection_per_call_and_always_closed():
    factory = _TrackingFactory()
    with serve_in_background(lambda tag, sections: 3) as server:
        client = DecisionClient(_config(server.endpoint), connection_factory=factory)
        client.decide(ROBBER_REQUEST)
        client.decide(ROBBER_REQUEST)

    assert len(factory.sockets) == 2
    assert factory.sockets[0] is not factory.sockets[1]
    assert all(connection.fileno() == -1 for connection in factory.sockets)


def test_timeout_is_reported_and_socket_closed():
    factory = _TrackingFactory()
    # Le service accepte la connexion (file d'attente) mais ne répond jamais
    with socket.create_server(("127.0.0.1", 0)) as silent:
        endpoint = silent.getsockname()[:2]
        client = DecisionClient(_config(endpoint, timeout=0.2), connection_factory=factory)

        outcome = client.decide(ROBBER_REQUEST)

    assert not outcome.ok
    assert outcome.reply is None
    assert isinstance(outcome.error, DecisionTimeout)
    assert factory.sockets[0].fileno() == -1


def test_refused_connection_is_reported():
    client = DecisionClient(_config(("127.0.0.1", unused_port()), timeout=1.0))

    outcome = client.decide(ROBBER_REQUEST)

    assert not outcome.ok
    assert isinstance(outcome.error, DecisionConnectionError)


@pytest.mark.parametrize("reply", [19, -1, 42])
def test_out_of_range_index_is_a_protocol_error(reply):
    with serve_in_background(lambda tag, sections: reply) as server:
        outcome = DecisionClient(_config(server.endpoint)).decide(ROBBER_REQUEST)

    assert isinstance(outcome.error, DecisionProtocolError)


def test_closed_without_reply_is_a_protocol_error():
    def failing_policy(tag, sections):
        raise RuntimeError("modèle indisponible")

    factory = _TrackingFactory()
    with serve_in_background(failing_policy) as server:
        client = DecisionClient(_config(server.endpoint), connection_factory=factory)
        outcome = client.decide(TRADE_REQUEST)

    assert isinstance(outcome.error, DecisionProtocolError)
    assert factory.sockets[0].fileno() == -1


def test_default_configuration_targets_reference_endpoint():
    client = DecisionClient()

    assert client.config.endpoint == ("localhost", 2004)
    assert client.config.timeout == 300.0
