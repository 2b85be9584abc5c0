# tests/conftest.py
import logging

import matplotlib

matplotlib.use("Agg")  # no display in test runs

import pytest

from mamdani.fuzzy_sets import Diagonal, Triangular
from mamdani.system import new_system
from mamdani.variable import FuzzyVariable


def _rate_variable(name: str) -> FuzzyVariable:
    """Bad / Medium / Good over a 0..10 rating scale."""
    var = FuzzyVariable(name)
    var.add_fuzzy_set(Diagonal("Bad", zero=4, one=0))
    var.add_fuzzy_set(Triangular("Medium", min_zero=3, one=5, max_zero=7))
    var.add_fuzzy_set(Diagonal("Good", zero=6, one=10))
    return var


@pytest.fixture
def make_rate_variable():
    return _rate_variable


@pytest.fixture
def song_rating():
    """
    The SongRating system: two rated inputs, one rated output, five rules.
    """
    system = new_system("SongRating")
    system.add_independent_variable(_rate_variable("VoiceRate"))
    system.add_independent_variable(_rate_variable("InstrumentalRate"))
    system.add_dependent_variable(_rate_variable("SongRate"))

    system.create_rule({"VoiceRate": "Good", "InstrumentalRate": "Good"}, ("SongRate", "Good"))
    system.create_rule({"VoiceRate": "Bad"}, ("SongRate", "Bad"))
    system.create_rule({"InstrumentalRate": "Bad"}, ("SongRate", "Bad"))
    system.create_rule({"VoiceRate": "Medium"}, ("SongRate", "Medium"))
    system.create_rule({"InstrumentalRate": "Medium"}, ("SongRate", "Medium"))
    return system


@pytest.fixture
def restore_loggers():
    """Undo handler/propagation changes made by setup_logging()."""
    from mamdani.logger import LOGGER_NAMES

    saved = {}
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        saved[name] = (list(log.handlers), log.propagate, log.level)
    yield
    for name, (handlers, propagate, level) in saved.items():
        log = logging.getLogger(name)
        for h in list(log.handlers):
            log.removeHandler(h)
            if h not in handlers:
                h.close()
        for h in handlers:
            log.addHandler(h)
        log.propagate = propagate
        log.setLevel(level)
