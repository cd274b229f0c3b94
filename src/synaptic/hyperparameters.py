import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import torch
import yaml

from .const import DEFAULT_LEARNING_RATE
from .squash import Squash

logger = logging.getLogger(__name__)


@dataclass
class BaseConfig:
    """
    Configuration shared by the layers of one network.

    Attributes
    ----------
    seed : int, optional
        Seed for the generator that draws initial weights and biases. When
        None, the global torch RNG is used instead.
    learning_rate : float
        Default step size for layer propagation. Default 0.1.
    squash : Squash or str
        Activation function assigned to newly created neurons.
    bias : float, optional
        Fixed initial bias for new neurons. Random in [-1, 1) if None.
    weight : float, optional
        Fixed initial weight for connections built by layer projection.
        Random in [-1, 1) if None.

    Derived Attributes (computed in __post_init__)
    -----------------------------------------------
    generator : torch.Generator or None
        Seeded generator, or None when ``seed`` is None.
    """

    seed: Optional[int] = 42
    learning_rate: float = DEFAULT_LEARNING_RATE
    squash: Union[Squash, str] = Squash.LOGISTIC
    bias: Optional[float] = None
    weight: Optional[float] = None
    generator: Optional[torch.Generator] = field(init=False, repr=False)

    def _validate(self):
        if self.learning_rate <= 0.0:
            raise ValueError("learning_rate must be positive.")
        if self.learning_rate > 1.0:
            logger.warning(
                "learning_rate (%s) is above 1.0. Online updates may diverge.",
                self.learning_rate,
            )

    def __post_init__(self):
        self.squash = Squash.resolve(self.squash)
        self.learning_rate = float(self.learning_rate)

        if self.seed is None:
            self.generator = None
        else:
            self.generator = torch.Generator().manual_seed(int(self.seed))

        self._validate()


def load_config(path) -> BaseConfig:
    """Read a YAML mapping of BaseConfig fields from ``path``."""
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping.")
    return BaseConfig(**data)
