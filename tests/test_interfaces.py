import math

from iiwactl.interfaces import (
    CommandInterface,
    InterfaceConfiguration,
    InterfaceConfigurationType,
    JointTrajectory,
    JointTrajectoryPoint,
    StateInterface,
)


def test_state_interface_full_name():
    si = StateInterface("joint_a1", "position")
    assert si.full_name() == "joint_a1/position"


def test_command_interface_full_name():
    ci = CommandInterface("joint_a3", "effort")
    assert ci.full_name() == "joint_a3/effort"


def test_interfaces_default_to_nan():
    si = StateInterface("a", "b")
    ci = CommandInterface("c", "d")
    assert si.full_name() == "a/b"
    assert ci.full_name() == "c/d"
    assert math.isnan(si.value) is True
    assert math.isnan(ci.value) is True


def test_command_interface_value_is_writable():
    ci = CommandInterface("joint_a2", "effort")
    ci.value = 2.5
    assert ci.value == 2.5


def test_interface_configuration_names_independent():
    first = InterfaceConfiguration(InterfaceConfigurationType.INDIVIDUAL)
    second = InterfaceConfiguration(InterfaceConfigurationType.INDIVIDUAL)
    first.names.append("joint_a1/position")
    assert second.names == []


def test_trajectory_defaults_are_empty_and_independent():
    p1 = JointTrajectoryPoint()
    p2 = JointTrajectoryPoint()
    p1.positions.append(1.0)
    assert p2.positions == []
    assert p2.velocities == [] and p2.accelerations == []
    traj = JointTrajectory(["joint_a1"], [p1])
    assert traj.points[0].positions == [1.0]
    assert JointTrajectory().joint_names == []