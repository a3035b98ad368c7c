"""Semantic component reading the seven external joint torques of the arm."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from iiwactl.interfaces import ActivationError, StateInterface

JOINT_NAMES: tuple[str, ...] = tuple(f"joint_a{i}" for i in range(1, 8))


class ExternalTorqueSensor:
    """Reads external torques of the seven joints from state interfaces."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._interface_names = [f"{name}/external_torque.{joint}" for joint in JOINT_NAMES]
        self._existing_axes = [True] * len(JOINT_NAMES)
        self._torques = [math.nan] * len(JOINT_NAMES)
        self._state_interfaces: list[StateInterface] = []

    @classmethod
    def from_interface_names(cls, interface_names: Iterable[str]) -> "ExternalTorqueSensor":
        """Build a sensor from one interface name per joint; an empty name marks a missing axis."""
        names = list(interface_names)
        if len(names) != len(JOINT_NAMES):
            raise ValueError(f"expected {len(JOINT_NAMES)} interface names, got {len(names)}")
        sensor = cls("")
        sensor._interface_names = [n for n in names if n]
        sensor._existing_axes = [bool(n) for n in names]
        return sensor

    def state_interface_names(self) -> list[str]:
        """Return the full names of the state interfaces this sensor reads."""
        return list(self._interface_names)

    def assign_loaned_state_interfaces(self, state_interfaces: Sequence[StateInterface]) -> None:
        """Take the interfaces matching this sensor's names, in the sensor's order."""
        ordered = []
        missing = []
        for wanted in self._interface_names:
            match = next((si for si in state_interfaces if si.full_name() == wanted), None)
            if match is None:
                missing.append(wanted)
            else:
                ordered.append(match)
        if missing:
            raise ActivationError(f"missing state interfaces: {', '.join(missing)}")
        self._state_interfaces = ordered

    def release_interfaces(self) -> None:
        """Drop the assigned state interfaces."""
        self._state_interfaces = []

    def get_torques(self) -> tuple[float, ...]:
        """Read and return the seven torques; axes without an interface stay NaN."""
        needed = sum(self._existing_axes)
        if len(self._state_interfaces) < needed:
            raise RuntimeError("state interfaces are not assigned")
        values = iter(self._state_interfaces)
        for index, exists in enumerate(self._existing_axes):
            if exists:
                self._torques[index] = next(values).value
        return tuple(self._torques)

    def values_as_message(self) -> list[float]:
        """Return the latest torques as message data."""
        return list(self.get_torques())