"""Controller publishing the external joint torques read by the sensor."""

from __future__ import annotations

from typing import Callable, Mapping, Optional, Sequence

from iiwactl.external_torque_sensor import JOINT_NAMES, ExternalTorqueSensor
from iiwactl.interfaces import (
    ConfigurationError,
    InterfaceConfiguration,
    InterfaceConfigurationType,
    StateInterface,
)

Publisher = Callable[[list], None]


class ExternalTorqueSensorBroadcaster:
    """Reads an external torque sensor and hands each reading to a publisher."""

    def __init__(self, publisher: Optional[Publisher] = None) -> None:
        self.publisher = publisher
        self.sensor_name = ""
        self.interface_names: list[str] = [""] * len(JOINT_NAMES)
        self._sensor: Optional[ExternalTorqueSensor] = None

    def on_configure(self, parameters: Mapping[str, str]) -> None:
        """Set up the sensor from ``sensor_name`` or ``interface_names.joint_aN`` parameters."""
        self.sensor_name = str(parameters.get("sensor_name", ""))
        self.interface_names = [
            str(parameters.get(f"interface_names.{joint}", "")) for joint in JOINT_NAMES
        ]
        no_interface_names = all(name == "" for name in self.interface_names)

        if not self.sensor_name and no_interface_names:
            raise ConfigurationError(
                "'sensor_name' or at least one 'interface_names.joint_a[x]' "
                "parameter has to be specified."
            )
        if self.sensor_name and not no_interface_names:
            raise ConfigurationError(
                "both 'sensor_name' and 'interface_names.joint_a[x]' parameters "
                "can not be specified together."
            )

        if self.sensor_name:
            self._sensor = ExternalTorqueSensor(self.sensor_name)
        else:
            self._sensor = ExternalTorqueSensor.from_interface_names(self.interface_names)

    def _configured_sensor(self) -> ExternalTorqueSensor:
        if self._sensor is None:
            raise ConfigurationError("broadcaster is not configured")
        return self._sensor

    def command_interface_configuration(self) -> InterfaceConfiguration:
        """The broadcaster commands nothing."""
        return InterfaceConfiguration(InterfaceConfigurationType.NONE)

    def state_interface_configuration(self) -> InterfaceConfiguration:
        """Request the sensor's state interfaces individually."""
        return InterfaceConfiguration(
            InterfaceConfigurationType.INDIVIDUAL,
            self._configured_sensor().state_interface_names(),
        )

    def on_activate(self, state_interfaces: Sequence[StateInterface]) -> None:
        """Hand the loaned state interfaces to the sensor."""
        self._configured_sensor().assign_loaned_state_interfaces(state_interfaces)

    def on_deactivate(self) -> None:
        """Release the sensor's state interfaces."""
        self._configured_sensor().release_interfaces()

    def update(self) -> None:
        """Publish the latest torques, if a publisher is set."""
        if self.publisher is not None:
            self.publisher(self._configured_sensor().values_as_message())