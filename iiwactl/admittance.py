"""Joint-space admittance controller driven by external torque measurements."""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence

from iiwactl.external_torque_sensor import ExternalTorqueSensor
from iiwactl.interfaces import (
    ActivationError,
    CommandError,
    CommandInterface,
    ConfigurationError,
    InterfaceConfiguration,
    InterfaceConfigurationType,
    JointTrajectory,
    StateInterface,
)

POSITION = "position"
VELOCITY = "velocity"

DEFAULT_STIFFNESS = 50.0
DEFAULT_DAMPING = 10.0
DEFAULT_MASS = 0.0


def _divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics: a zero denominator gives an infinity or NaN."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


class AdmittanceController:
    """Computes the compliant motion given by the admittance relationship.

    For each joint the admittance acceleration is
    ``qda + (stiffness * (qd - q) + damping * (qdv - qv) + tau_ext) / mass``,
    where ``qd``, ``qdv`` and ``qda`` come from the first point of the proxy
    trajectory, ``q`` and ``qv`` are the measured position and velocity and
    ``tau_ext`` is the external torque read from the sensor. The position
    command written to each joint is the controller's internal position,
    which is taken from the measured position on activation.
    """

    def __init__(self) -> None:
        self.joint_names: list[str] = []
        self.stiffness: list[float] = []
        self.damping: list[float] = []
        self.mass: list[float] = []
        self.sensor_name = ""
        self.internal_position: list[float] = []
        self.internal_velocity: list[float] = []
        self._sensor: Optional[ExternalTorqueSensor] = None
        self._command_interfaces: list[CommandInterface] = []
        self._state_interfaces: list[StateInterface] = []
        self._proxy: Optional[JointTrajectory] = None

    def on_configure(self, parameters: Mapping[str, Any]) -> None:
        """Read ``joints``, ``stiffness``, ``damping``, ``mass`` and ``sensor_name``."""
        joints = [str(name) for name in parameters.get("joints", [])]
        if not joints:
            raise ConfigurationError("'joints' parameter was empty")

        stiffness = [float(v) for v in parameters.get("stiffness", [])]
        damping = [float(v) for v in parameters.get("damping", [])]
        mass = [float(v) for v in parameters.get("mass", [])]

        stiffness = stiffness or [DEFAULT_STIFFNESS] * len(joints)
        damping = damping or [DEFAULT_DAMPING] * len(joints)
        mass = mass or [DEFAULT_MASS] * len(joints)

        if len(stiffness) != len(damping) or len(stiffness) != len(mass):
            raise ConfigurationError("incoherent size of admittance parameters")
        if any(k < 0 or d < 0 or m < 0 for k, d, m in zip(stiffness, damping, mass)):
            raise ConfigurationError("wrong admittance parameters")

        sensor_name = str(parameters.get("sensor_name", ""))
        if not sensor_name:
            raise ConfigurationError("'sensor_name' parameter has to be specified.")

        self.joint_names = joints
        self.stiffness = stiffness
        self.damping = damping
        self.mass = mass
        self.sensor_name = sensor_name
        self._sensor = ExternalTorqueSensor(sensor_name)
        self._proxy = None

    def _configured_sensor(self) -> ExternalTorqueSensor:
        if self._sensor is None:
            raise ConfigurationError("controller is not configured")
        return self._sensor

    def command_interface_configuration(self) -> InterfaceConfiguration:
        """Request the position command interface of every controlled joint."""
        return InterfaceConfiguration(
            InterfaceConfigurationType.INDIVIDUAL,
            [f"{joint}/{POSITION}" for joint in self.joint_names],
        )

    def _joint_state_names(self) -> list[str]:
        names = []
        for joint in self.joint_names:
            names.append(f"{joint}/{POSITION}")
            names.append(f"{joint}/{VELOCITY}")
        return names

    def state_interface_configuration(self) -> InterfaceConfiguration:
        """Request joint position/velocity states followed by the sensor's states."""
        sensor_names = self._configured_sensor().state_interface_names()
        return InterfaceConfiguration(
            InterfaceConfigurationType.INDIVIDUAL,
            self._joint_state_names() + sensor_names,
        )

    def on_activate(
        self,
        command_interfaces: Sequence[CommandInterface],
        state_interfaces: Sequence[StateInterface],
    ) -> None:
        """Claim position commands, joint states and sensor states in joint order."""
        sensor = self._configured_sensor()
        ordered_commands = [
            ci
            for joint in self.joint_names
            for ci in command_interfaces
            if ci.name == joint and ci.interface_name == POSITION
        ]
        if len(ordered_commands) != len(self.joint_names) or len(command_interfaces) != len(
            ordered_commands
        ):
            raise ActivationError(
                f"Expected {len(self.joint_names)} position command interfaces, "
                f"got {len(ordered_commands)}"
            )

        by_name = {si.full_name(): si for si in state_interfaces}
        wanted = self._joint_state_names()
        missing = [name for name in wanted if name not in by_name]
        if missing:
            raise ActivationError(f"missing state interfaces: {', '.join(missing)}")

        sensor.assign_loaned_state_interfaces(state_interfaces)

        self._command_interfaces = ordered_commands
        self._state_interfaces = [by_name[name] for name in wanted]
        self.internal_position = [self._state_interfaces[2 * i].value for i in range(len(wanted) // 2)]
        self.internal_velocity = [0.0] * len(self.joint_names)

    def on_deactivate(self) -> None:
        """Set the command of every joint to zero and release the sensor."""
        for ci in self._command_interfaces:
            ci.value = 0.0
        self._configured_sensor().release_interfaces()

    def set_proxy(self, trajectory: Optional[JointTrajectory]) -> None:
        """Store the latest proxy trajectory to follow."""
        self._proxy = trajectory

    def update(self) -> list[float]:
        """Compute the admittance accelerations, write the position commands, return them.

        Returns an empty list if no proxy has been received yet.
        """
        proxy = self._proxy
        if proxy is None:
            return []

        n = len(self.joint_names)
        if len(proxy.joint_names) != n or not proxy.points or len(proxy.points[0].positions) != n:
            raise CommandError("command size does not match number of interfaces")
        if len(self._command_interfaces) != n:
            raise CommandError("controller is not active")

        external_torques = self._configured_sensor().get_torques()
        point = proxy.points[0]
        velocities = point.velocities if len(point.velocities) == n else [0.0] * n
        accelerations = point.accelerations if len(point.accelerations) == n else [0.0] * n

        results = []
        for index, command in enumerate(self._command_interfaces):
            q = self._state_interfaces[2 * index].value
            qv = self._state_interfaces[2 * index + 1].value
            qd = point.positions[index]
            force = (
                self.stiffness[index] * (qd - q)
                + self.damping[index] * (velocities[index] - qv)
                + external_torques[index]
            )
            results.append(accelerations[index] + _divide(force, self.mass[index]))
            command.value = self.internal_position[index]
        return results