"""
Custom exceptions for the Tetrix simulation.
These are raised at the boundaries (configuration, mode changes), never
from inside the simulation loop.
"""


class TetrixError(Exception):
    """Base class for all Tetrix errors."""
    pass


class ConfigurationError(TetrixError, ValueError):
    """Raised when a configuration value is out of range or inconsistent."""
    pass


class InvalidTransitionError(TetrixError):
    """Raised when a game mode change is requested from the wrong mode."""

    def __init__(self, current, requested):
        super().__init__(f"Cannot go from {current.name} to {requested.name}")
        self.current = current
        self.requested = requested
