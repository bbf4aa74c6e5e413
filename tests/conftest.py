"""Pytest configuration and fixtures for secretary_sim tests."""

import logging

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so statistical checks are reproducible."""
    return np.random.default_rng(20240601)


@pytest.fixture
def quiet_logger(monkeypatch):
    """Route the driver's logger to a plain propagating logger."""
    from secretary_sim import run_experiments

    logger = logging.getLogger("secretary_sim.tests")
    monkeypatch.setattr(run_experiments, "get_logger", lambda *, mode="full": logger)
    return logger
