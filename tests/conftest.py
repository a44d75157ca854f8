"""
Pytest configuration and fixtures.
"""

import pytest

from lotstats.core.config import Settings, ValuationConfig


@pytest.fixture
def linear_prices() -> list[float]:
    """Evenly spaced prices, oldest first."""
    return [10.0, 20.0, 30.0, 40.0, 50.0]


@pytest.fixture
def stable_prices() -> list[float]:
    """Prices hovering around 25 (CV well below 0.3)."""
    return [25.0, 26.0, 24.0, 25.0, 26.0, 25.0]


@pytest.fixture
def volatile_prices() -> list[float]:
    """Prices swinging by an order of magnitude (CV above 0.8)."""
    return [10.0, 100.0, 20.0, 200.0, 30.0, 300.0]


@pytest.fixture
def heavy_tail_prices() -> list[float]:
    """Tight cluster with one absurd listing - selects the MAD filter."""
    return [10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0, 1000.0]


@pytest.fixture
def large_sample() -> list[float]:
    """Twelve evenly spaced prices."""
    return [float(p) for p in range(10, 130, 10)]


@pytest.fixture
def valuation_config() -> ValuationConfig:
    """Valuation config with all defaults."""
    return ValuationConfig.from_dict({})


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings writing into a temporary directory."""
    return Settings(
        config_dir=tmp_path / "config",
        output_dir=tmp_path / "output",
        max_workers=2,
    )
