# iiwactl

Building blocks for joint-space control of a 7-axis robot arm. Everything is plain Python objects: you pass measured values in and read commands back.

## Modules

- `iiwactl.low_pass_filter`: `LowPassFilter` is a first-order discrete-time low-pass filter, `value = alpha * value + (1 - alpha) * input`, for scalars or numpy arrays. Build it from `alpha`, which must lie in [0, 1] or `ValueError` is raised, or from a cutoff with `LowPassFilter.from_cutoff(cutoff_hz, dt)`.
- `iiwactl.levmarq`: `LevMarq` is a Levenberg–Marquardt solver for non-linear least squares. `solve(z, f, jacobian)` returns `(solution, error)`. If `jacobian` is `None`, the Jacobian is estimated by central differences (`calc_derivatives`). For stepwise use, call `init` and `step`, then `current_solution`. The optional attributes are `verbose`, `step_callback` and `stop_function`.
- `iiwactl.interfaces` holds the shared types:
  - `StateInterface` and `CommandInterface`, each a name, an interface name and a value; `full_name()` gives `name/interface`.
  - `InterfaceConfiguration` and `InterfaceConfigurationType`.
  - `JointTrajectory` and `JointTrajectoryPoint`.
  - The errors `ConfigurationError`, `ActivationError` and `CommandError`.
- `iiwactl.external_torque_sensor`: `ExternalTorqueSensor` reads seven external joint torques from state interfaces.
  - `ExternalTorqueSensor(name)` uses `<name>/external_torque.joint_a1` … `joint_a7`.
  - `ExternalTorqueSensor.from_interface_names(names)` takes one name per joint. An empty name marks a missing axis, which reads as NaN.
- `iiwactl.torque_broadcaster`: `ExternalTorqueSensorBroadcaster(publisher)` passes the sensor's torques to `publisher` on each `update()`. Configure it with `sensor_name` or with `interface_names.joint_aN` parameters, never both.
- `iiwactl.impedance`: `ImpedanceController` writes effort commands `mass * qda + stiffness * (qd - q) + damping * (qdv - qv)`.
- `iiwactl.admittance`: `AdmittanceController` reads the external torque sensor.
  - `update()` returns, per joint, `qda + (stiffness * (qd - q) + damping * (qdv - qv) + tau_ext) / mass`.
  - Each position command is set to the controller's internal position, which is taken from the measured position on activation.
- `iiwactl.joystick_servo` maps gamepad input (XBOX 1 layout, `Axis` and `Button`) to servo commands:
  - `convert_joy_to_cmd` returns a `TwistCommand`, or a `JointJogCommand` when a face button or the D-pad is active.
  - `update_cmd_frame` switches between `tool0` and `iiwa_base`.
  - `JoyToServo.handle_joy` returns stamped commands.
  - `build_collision_scene` returns the planning-scene diff with two box tables.

## Controller lifecycle

The controllers are used in this order: `on_configure(parameters)`, `on_activate(...)`, `set_proxy(trajectory)` and `update()`, then `on_deactivate()`. Each failure raises its own error:

- Bad parameters raise `ConfigurationError`.
- Missing or extra interfaces raise `ActivationError`.
- A proxy trajectory whose size does not match raises `CommandError`.

Defaults when a gain list is empty: stiffness 50, damping 10, mass 0.

```python
from iiwactl.impedance import ImpedanceController
from iiwactl.interfaces import (
    CommandInterface, JointTrajectory, JointTrajectoryPoint, StateInterface,
)

ctrl = ImpedanceController()
ctrl.on_configure({"joints": ["joint_a1"], "stiffness": [50.0], "damping": [10.0], "mass": [0.0]})
effort = CommandInterface("joint_a1", "effort")
ctrl.on_activate(
    [effort],
    [StateInterface("joint_a1", "position", 0.0), StateInterface("joint_a1", "velocity", 0.0)],
)
ctrl.set_proxy(JointTrajectory(["joint_a1"], [JointTrajectoryPoint(positions=[0.1])]))
torques = ctrl.update()   # [5.0]; effort.value is now 5.0
ctrl.on_deactivate()      # effort.value back to 0.0
```

## Filtering

```python
from iiwactl.low_pass_filter import LowPassFilter

filt = LowPassFilter.from_cutoff(40.0, 0.005)
filt.set_initial(0.0)
smoothed = filt.filter(1.0)
```

## Least squares

```python
import numpy as np
from iiwactl.levmarq import LevMarq

solver = LevMarq(max_iters=100, min_error=1e-12, min_step_error_diff=0.0, tau=1.0, der_epsilon=1e-3)
z, err = solver.solve(np.array([0.0, 0.0]), lambda z: z - np.array([1.0, 2.0]), None)
```

## Joystick mapping

```python
from iiwactl.joystick_servo import JoyToServo, convert_joy_to_cmd

axes = [0.0, 0.0, 1.0, 0.0, 0.5, 1.0, 0.0, 0.0]
buttons = [0] * 11
command = convert_joy_to_cmd(axes, buttons)   # TwistCommand with linear == (0.0, 0.0, 0.5)

servo = JoyToServo()
stamped = servo.handle_joy(axes, buttons)     # frame_id "iiwa_base", stamp = time.time()
```

## What this package does not do

It does not connect to a robot controller. It has no hardware driver, it starts no message nodes, and it does not subscribe or publish on topics. Measured values arrive through the `value` fields of `StateInterface` objects that you supply. Commands come back through `CommandInterface` objects and return values, and the broadcaster hands its readings to the callable you give it. There is no command-line program.

## Install and test

```
pip install .
pip install .[test]
pytest
```