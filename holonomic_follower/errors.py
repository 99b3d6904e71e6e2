from __future__ import annotations

from enum import Enum


class FollowerError(Enum):
    CONFIGURATION_CONFLICT = "configuration_conflict"
    INVALID_TRAJECTORY_SAMPLE = "invalid_trajectory_sample"
    NOT_INITIALIZED = "not_initialized"


class FollowerException(RuntimeError):
    def __init__(self, error: FollowerError, message: str):
        super().__init__(message)
        self.error = error


class ConfigurationConflict(FollowerException, ValueError):
    """Raised when the drive output configuration is ambiguous or incomplete."""

    def __init__(self, message: str):
        super().__init__(FollowerError.CONFIGURATION_CONFLICT, message)


class InvalidTrajectorySample(FollowerException):
    """Raised when a trajectory sampler hands back unusable reference data."""

    def __init__(self, message: str):
        super().__init__(FollowerError.INVALID_TRAJECTORY_SAMPLE, message)
