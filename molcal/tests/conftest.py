"""Shared pytest fixtures and configuration.

This module provides common fixtures used across test modules:
- Temporary directories for storage and export tests
- Sample compound records and computed results
"""

import tempfile
import shutil
from pathlib import Path

import pytest


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that is cleaned up after the test."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def limiting_reactant():
    """Limiting reactant: 500 mg of a 100 g/mol compound (0.005 mol)."""
    from molcal.core import CompoundRecord, MassUnit

    return CompoundRecord(
        name="Limiting Reactant",
        molecular_weight="100",
        weight="500",
        unit=MassUnit.MG,
        equivalents="1.0",
    )


@pytest.fixture
def reaction_records(limiting_reactant):
    """Limiting reactant plus a reagent (2 eq) and a liquid (1.5 eq)."""
    from molcal.core import CompoundRecord

    return [
        limiting_reactant,
        CompoundRecord(name="Reagent B", molecular_weight="50", equivalents="2"),
        CompoundRecord(
            name="Triethylamine",
            molecular_weight="101.19",
            equivalents="1.5",
            density="0.726",
        ),
    ]


@pytest.fixture
def reaction_results(reaction_records):
    """Computed results for reaction_records."""
    from molcal.engine import compute

    return compute(reaction_records)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Keep the cached default config from leaking between tests."""
    from molcal.configs import clear_cache

    clear_cache()
    yield
    clear_cache()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "gui: marks tests that build Panel widgets (deselect with '-m \"not gui\"')"
    )
