"""Shared test fixtures."""

import numpy as np
import pytest
import torch


@pytest.fixture(autouse=True)
def set_random_seed():
    """Seed torch and numpy so random weights and biases are reproducible."""
    torch.manual_seed(42)
    np.random.seed(42)
