"""Tests pour l'encodage des vecteurs de ressources."""

import numpy as np

from catan_offload.engine.rules import CLAY, ORE, SHEEP, WHEAT, WOOD
from catan_offload.features.resources import ResourceVector, encode_resources


def test_encode_uses_fixed_order():
    vector = encode_resources({WHEAT: 5, CLAY: 1, ORE: 4, WOOD: 2, SHEEP: 3})

    assert vector == ResourceVector(clay=1, wood=2, sheep=3, ore=4, wheat=5)
    assert tuple(vector) == (1, 2, 3, 4, 5)
    assert vector.total == 15


def test_storage_order_never_changes_output():
    holdings = {CLAY: 2, WOOD: 0, SHEEP: 1, ORE: 7, WHEAT: 3}
    reversed_holdings = dict(reversed(list(holdings.items())))

    assert encode_resources(holdings) == encode_resources(reversed_holdings)


def test_encode_is_idempotent():
    holdings = {ORE: 3, SHEEP: 1}

    first = encode_resources(holdings)
    second = encode_resources(holdings)

    assert first == second
    assert holdings == {ORE: 3, SHEEP: 1}


def test_missing_and_unknown_kinds_degrade_to_zero():
    assert encode_resources({}) == ResourceVector(0, 0, 0, 0, 0)
    assert encode_resources(None) == ResourceVector(0, 0, 0, 0, 0)
    assert encode_resources({"GOLD": 9, SHEEP: 2}) == ResourceVector(0, 0, 2, 0, 0)


def test_negative_counts_are_clamped():
    vector = encode_resources({CLAY: -3, WOOD: 1})

    assert vector.clay == 0
    assert all(component >= 0 for component in vector)


def test_to_array_is_integer_vector():
    array = encode_resources({WOOD: 4}).to_array()

    assert array.dtype == np.int64
    np.testing.assert_array_equal(array, np.array([0, 4, 0, 0, 0]))
