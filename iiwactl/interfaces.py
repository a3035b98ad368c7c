"""Shared controller types: interface handles, configurations, trajectories and errors."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class ConfigurationError(Exception):
    """Raised when a controller cannot be configured from its parameters."""


class ActivationError(Exception):
    """Raised when a controller cannot claim the interfaces it needs."""


class CommandError(Exception):
    """Raised when a received command does not fit the controller."""


class InterfaceConfigurationType(Enum):
    """How a controller asks for hardware interfaces."""

    ALL = "all"
    INDIVIDUAL = "individual"
    NONE = "none"


@dataclass
class InterfaceConfiguration:
    """The interfaces a controller requests, by full name."""

    type: InterfaceConfigurationType
    names: list[str] = field(default_factory=list)


@dataclass
class StateInterface:
    """A readable hardware value such as a joint position."""

    name: str
    interface_name: str
    value: float = math.nan

    def full_name(self) -> str:
        """Return ``<name>/<interface_name>``."""
        return f"{self.name}/{self.interface_name}"


@dataclass
class CommandInterface:
    """A writable hardware value such as a joint effort."""

    name: str
    interface_name: str
    value: float = math.nan

    def full_name(self) -> str:
        """Return ``<name>/<interface_name>``."""
        return f"{self.name}/{self.interface_name}"


@dataclass
class JointTrajectoryPoint:
    """One point of a joint trajectory."""

    positions: list[float] = field(default_factory=list)
    velocities: list[float] = field(default_factory=list)
    accelerations: list[float] = field(default_factory=list)


@dataclass
class JointTrajectory:
    """A trajectory over named joints."""

    joint_names: list[str] = field(default_factory=list)
    points: list[JointTrajectoryPoint] = field(default_factory=list)