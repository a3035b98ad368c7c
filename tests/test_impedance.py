import pytest

from iiwactl.impedance import ImpedanceController
from iiwactl.interfaces import (
    ActivationError,
    CommandError,
    CommandInterface,
    ConfigurationError,
    InterfaceConfigurationType,
    JointTrajectory,
    JointTrajectoryPoint,
    StateInterface,
)

JOINTS = ["joint_a1", "joint_a2"]


def _make_active(params=None, positions=(0.0, 0.0), velocities=(0.0, 0.0)):
    controller = ImpedanceController()
    controller.on_configure(params or {"joints": JOINTS})
    commands = [CommandInterface(j, "effort") for j in JOINTS]
    states = []
    for joint, p, v in zip(JOINTS, positions, velocities):
        states.append(StateInterface(joint, "velocity", v))
        states.append(StateInterface(joint, "position", p))
    controller.on_activate(commands, states)
    return controller, commands, states


def _proxy(positions, velocities=(), accelerations=()):
    return JointTrajectory(
        joint_names=list(JOINTS),
        points=[
            JointTrajectoryPoint(
                positions=list(positions),
                velocities=list(velocities),
                accelerations=list(accelerations),
            )
        ],
    )


def test_configure_defaults():
    controller = ImpedanceController()
    controller.on_configure({"joints": JOINTS})
    assert controller.stiffness == [50.0, 50.0]
    assert controller.damping == [10.0, 10.0]
    assert controller.mass == [0.0, 0.0]


def test_configure_empty_joints_raises():
    with pytest.raises(ConfigurationError):
        ImpedanceController().on_configure({"joints": []})


def test_configure_incoherent_sizes_raises():
    with pytest.raises(ConfigurationError):
        ImpedanceController().on_configure(
            {"joints": JOINTS, "stiffness": [1.0, 2.0], "damping": [1.0]}
        )


def test_configure_negative_parameter_raises():
    with pytest.raises(ConfigurationError):
        ImpedanceController().on_configure(
            {"joints": JOINTS, "stiffness": [1.0, -2.0], "damping": [1.0, 1.0], "mass": [0, 0]}
        )


def test_interface_configurations():
    controller = ImpedanceController()
    controller.on_configure({"joints": JOINTS})
    cmd = controller.command_interface_configuration()
    assert cmd.type is InterfaceConfigurationType.INDIVIDUAL
    assert cmd.names == ["joint_a1/effort", "joint_a2/effort"]
    state = controller.state_interface_configuration()
    assert state.names == [
        "joint_a1/position",
        "joint_a1/velocity",
        "joint_a2/position",
        "joint_a2/velocity",
    ]


def test_activate_wrong_command_interface_raises():
    controller = ImpedanceController()
    controller.on_configure({"joints": JOINTS})
    commands = [CommandInterface(j, "position") for j in JOINTS]
    with pytest.raises(ActivationError):
        controller.on_activate(commands, [])


def test_activate_extra_command_interface_raises():
    controller = ImpedanceController()
    controller.on_configure({"joints": JOINTS})
    commands = [CommandInterface(j, "effort") for j in JOINTS]
    commands.append(CommandInterface("joint_a3", "effort"))
    states = [StateInterface(j, i, 0.0) for j in JOINTS for i in ("position", "velocity")]
    with pytest.raises(ActivationError):
        controller.on_activate(commands, states)


def test_update_without_proxy_writes_nothing():
    controller, commands, _ = _make_active()
    assert controller.update() == []
    assert all(c.value != c.value for c in commands)  # still NaN


def test_update_at_proxy_gives_zero_torque():
    controller, commands, _ = _make_active(positions=(0.3, -0.2))
    controller.set_proxy(_proxy([0.3, -0.2]))
    assert controller.update() == [0.0, 0.0]
    assert [c.value for c in commands] == [0.0, 0.0]


def test_update_stiffness_term():
    params = {"joints": JOINTS, "stiffness": [2.0, 4.0], "damping": [0.0, 0.0], "mass": [0.0, 0.0]}
    controller, commands, _ = _make_active(params)
    controller.set_proxy(_proxy([1.5, 0.5]))
    torques = controller.update()
    assert torques == pytest.approx([3.0, 2.0])
    assert [c.value for c in commands] == pytest.approx(torques)


def test_update_is_linear_in_position_error():
    controller, _, _ = _make_active()
    controller.set_proxy(_proxy([0.1, 0.2]))
    first = controller.update()
    controller.set_proxy(_proxy([0.2, 0.4]))
    second = controller.update()
    assert second == pytest.approx([2 * t for t in first])


def test_update_velocity_and_acceleration_terms():
    params = {"joints": JOINTS, "stiffness": [0.0, 0.0], "damping": [1.0, 1.0], "mass": [1.0, 1.0]}
    controller, _, _ = _make_active(params, velocities=(0.5, 0.5))
    controller.set_proxy(_proxy([0.0, 0.0], velocities=[0.5, 1.5], accelerations=[2.0, 0.0]))
    assert controller.update() == pytest.approx([2.0, 1.0])


def test_update_ignores_partial_velocities():
    params = {"joints": JOINTS, "stiffness": [0.0, 0.0], "damping": [1.0, 1.0], "mass": [0.0, 0.0]}
    controller, _, _ = _make_active(params)
    controller.set_proxy(_proxy([0.0, 0.0], velocities=[5.0]))
    assert controller.update() == [0.0, 0.0]


def test_update_size_mismatch_raises():
    controller, _, _ = _make_active()
    controller.set_proxy(
        JointTrajectory(joint_names=["joint_a1"], points=[JointTrajectoryPoint(positions=[0.0])])
    )
    with pytest.raises(CommandError):
        controller.update()


def test_deactivate_zeroes_commands():
    controller, commands, _ = _make_active()
    controller.set_proxy(_proxy([1.0, 1.0]))
    controller.update()
    controller.on_deactivate()
    assert [c.value for c in commands] == [0.0, 0.0]