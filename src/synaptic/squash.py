"""
Activation (squash) functions.

The set is closed: ``Squash.LOGISTIC``, ``Squash.TANH``, ``Squash.IDENTITY``,
``Squash.HLIM`` and ``Squash.RELU`` are the only instances. Each evaluates both
the activation value and its derivative at the pre-activation state of a
neuron.
"""

import math
from typing import Dict


def _logistic(x: float) -> float:
    # Split on sign so math.exp never overflows for large |x|.
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


class Squash:
    """
    Activation function with its derivative.

    Attributes
    ----------
    name : str
        Registry name, used in configuration files.
    """

    name = ""

    def value(self, x: float) -> float:
        raise NotImplementedError

    def derivative(self, x: float) -> float:
        raise NotImplementedError

    def __repr__(self):
        return f"Squash.{self.name.upper()}"

    @classmethod
    def resolve(cls, squash) -> "Squash":
        """Return the instance for ``squash``, given either an instance or its name."""
        if isinstance(squash, cls):
            return squash
        try:
            return SQUASH[str(squash).lower()]
        except KeyError:
            names = ", ".join(SQUASH)
            raise ValueError(f"Unknown squash '{squash}'. Expected one of: {names}.")


class _Logistic(Squash):
    """f(x) = 1 / (1 + e^-x), f'(x) = f(x) * (1 - f(x))."""

    name = "logistic"

    def value(self, x):
        return _logistic(x)

    def derivative(self, x):
        fx = _logistic(x)
        return fx * (1.0 - fx)


class _Tanh(Squash):
    name = "tanh"

    def value(self, x):
        return math.tanh(x)

    def derivative(self, x):
        return 1.0 - math.tanh(x) ** 2


class _Identity(Squash):
    name = "identity"

    def value(self, x):
        return x

    def derivative(self, x):
        return 1.0


class _HardLimit(Squash):
    """Step at 0. The derivative is 1 everywhere so error still flows through."""

    name = "hlim"

    def value(self, x):
        return 1.0 if x > 0.0 else 0.0

    def derivative(self, x):
        return 1.0


class _Relu(Squash):
    name = "relu"

    def value(self, x):
        return x if x > 0.0 else 0.0

    def derivative(self, x):
        return 1.0 if x > 0.0 else 0.0


Squash.LOGISTIC = _Logistic()
Squash.TANH = _Tanh()
Squash.IDENTITY = _Identity()
Squash.HLIM = _HardLimit()
Squash.RELU = _Relu()

SQUASH: Dict[str, Squash] = {
    squash.name: squash
    for squash in (Squash.LOGISTIC, Squash.TANH, Squash.IDENTITY, Squash.HLIM, Squash.RELU)
}
