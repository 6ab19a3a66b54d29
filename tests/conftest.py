"""Pytest configuration and fixtures for the Enigma tests.

The historical catalogs in `suites` double as test data: their outputs
for a handful of settings are well-known reference vectors.
"""

import pytest

from alphabet import ALPHA26, Alphabet
from machine import Machine
from permutation import Permutation
from rotors import Rotor
from suites import ARMY, NAVAL
from utilities import read_config


@pytest.fixture
def abcd():
    """Four-symbol alphabet used by the small hand-checked cases."""
    return Alphabet("ABCD")


@pytest.fixture
def alpha26():
    return Alphabet(ALPHA26)


@pytest.fixture
def naval():
    """Five-slot Naval M4 machine with the built-in catalog."""
    return read_config(NAVAL).build()


@pytest.fixture
def army():
    """Four-slot Enigma I machine (reflector + three moving rotors)."""
    return read_config(ARMY).build()


@pytest.fixture
def two_slot(alpha26):
    """Reflector plus a single moving rotor I."""
    rotor = Rotor.moving(
        "I",
        Permutation("(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)", alpha26),
        "Q",
    )
    refl = Rotor.reflector(
        "B",
        Permutation(
            "(AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)",
            alpha26,
        ),
    )
    return Machine(alpha26, 2, 1, [refl, rotor])
