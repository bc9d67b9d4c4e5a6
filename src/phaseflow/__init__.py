"""PhaseFlow: interactive phase portraits of two-dimensional ODE systems."""

__version__ = "0.1.0"
