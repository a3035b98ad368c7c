"""Joint-space impedance and admittance control, torque sensing, filtering, least squares and joystick servo mapping for 7-axis arms."""

__version__ = "0.1.0"

__all__ = [
    "admittance",
    "external_torque_sensor",
    "impedance",
    "interfaces",
    "joystick_servo",
    "levmarq",
    "low_pass_filter",
    "torque_broadcaster",
]