import random

import pytest

from impostor.config import Settings
from impostor.engine.roles import SecretTarget
from impostor.engine.room import Room
from impostor.service import GameService


CATALOG = [
    SecretTarget(name="Lionel Messi", club="Inter Miami"),
    SecretTarget(name="Luka Modric", club="AC Milan"),
]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def catalog():
    return list(CATALOG)


@pytest.fixture
def settings(catalog):
    return Settings(room_idle_timeout=None, catalog=catalog)


@pytest.fixture
def service(settings, rng):
    return GameService(settings, rng=rng)


@pytest.fixture
def room():
    return Room.create(["Ana", "Bruno", "Carla"])
