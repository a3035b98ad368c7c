"""Joint-space impedance controller writing effort commands."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

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
EFFORT = "effort"

DEFAULT_STIFFNESS = 50.0
DEFAULT_DAMPING = 10.0
DEFAULT_MASS = 0.0


class ImpedanceController:
    """Computes joint torques from the impedance relationship towards a proxy trajectory.

    For each joint the commanded torque is
    ``mass * qda + stiffness * (qd - q) + damping * (qdv - qv)``,
    where ``qd``, ``qdv`` and ``qda`` come from the first point of the proxy
    trajectory and ``q``, ``qv`` are the measured position and velocity.
    """

    def __init__(self) -> None:
        self.joint_names: list[str] = []
        self.stiffness: list[float] = []
        self.damping: list[float] = []
        self.mass: list[float] = []
        self._command_interfaces: list[CommandInterface] = []
        self._state_interfaces: list[StateInterface] = []
        self._proxy: Optional[JointTrajectory] = None

    def on_configure(self, parameters: Mapping[str, Any]) -> None:
        """Read ``joints``, ``stiffness``, ``damping`` and ``mass`` from the parameters."""
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
            raise ConfigurationError("incoherent size of impedance parameters")
        if any(k < 0 or d < 0 or m < 0 for k, d, m in zip(stiffness, damping, mass)):
            raise ConfigurationError("wrong impedance parameters")

        self.joint_names = joints
        self.stiffness = stiffness
        self.damping = damping
        self.mass = mass
        self._proxy = None

    def command_interface_configuration(self) -> InterfaceConfiguration:
        """Request the effort command interface of every controlled joint."""
        return InterfaceConfiguration(
            InterfaceConfigurationType.INDIVIDUAL,
            [f"{joint}/{EFFORT}" for joint in self.joint_names],
        )

    def state_interface_configuration(self) -> InterfaceConfiguration:
        """Request position and velocity state interfaces of every controlled joint."""
        names = []
        for joint in self.joint_names:
            names.append(f"{joint}/{POSITION}")
            names.append(f"{joint}/{VELOCITY}")
        return InterfaceConfiguration(InterfaceConfigurationType.INDIVIDUAL, names)

    def on_activate(
        self,
        command_interfaces: Sequence[CommandInterface],
        state_interfaces: Sequence[StateInterface],
    ) -> None:
        """Claim the effort commands and position/velocity states in joint order."""
        ordered_commands = [
            ci
            for joint in self.joint_names
            for ci in command_interfaces
            if ci.full_name() == f"{joint}/{EFFORT}"
        ]
        if len(ordered_commands) != len(self.joint_names) or len(command_interfaces) != len(
            ordered_commands
        ):
            raise ActivationError(
                f"Expected {len(self.joint_names)} effort command interfaces, "
                f"got {len(ordered_commands)}"
            )

        by_name = {si.full_name(): si for si in state_interfaces}
        wanted = self.state_interface_configuration().names
        missing = [name for name in wanted if name not in by_name]
        if missing:
            raise ActivationError(f"missing state interfaces: {', '.join(missing)}")

        self._command_interfaces = ordered_commands
        self._state_interfaces = [by_name[name] for name in wanted]

    def on_deactivate(self) -> None:
        """Set the effort command of every joint to zero."""
        for ci in self._command_interfaces:
            ci.value = 0.0

    def set_proxy(self, trajectory: Optional[JointTrajectory]) -> None:
        """Store the latest proxy trajectory to follow."""
        self._proxy = trajectory

    def update(self) -> list[float]:
        """Compute and write the torques; return them (empty if no proxy was received)."""
        proxy = self._proxy
        if proxy is None:
            return []

        n = len(self.joint_names)
        if len(proxy.joint_names) != n or not proxy.points or len(proxy.points[0].positions) != n:
            raise CommandError("command size does not match number of interfaces")
        if len(self._command_interfaces) != n:
            raise CommandError("controller is not active")

        point = proxy.points[0]
        velocities = point.velocities if len(point.velocities) == n else [0.0] * n
        accelerations = point.accelerations if len(point.accelerations) == n else [0.0] * n

        torques = []
        for index, command in enumerate(self._command_interfaces):
            q = self._state_interfaces[2 * index].value
            qv = self._state_interfaces[2 * index + 1].value
            qd = point.positions[index]
            tau = (
                self.mass[index] * accelerations[index]
                + self.stiffness[index] * (qd - q)
                + self.damping[index] * (velocities[index] - qv)
            )
            command.value = tau
            torques.append(tau)
        return torques