"""Map gamepad input to Cartesian twist or joint-jog servo commands."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Sequence, Union

JOY_TOPIC = "/joy"
TWIST_TOPIC = "/servo_node/delta_twist_cmds"
JOINT_TOPIC = "/servo_node/delta_joint_cmds"
ROS_QUEUE_SIZE = 10
EEF_FRAME_ID = "tool0"
BASE_FRAME_ID = "iiwa_base"
JOINT_JOG_FRAME_ID = "joint_a3"


class Axis(IntEnum):
    """Index of each continuous axis in the joystick axes array (XBOX 1 layout)."""

    LEFT_STICK_X = 0
    LEFT_STICK_Y = 1
    LEFT_TRIGGER = 2
    RIGHT_STICK_X = 3
    RIGHT_STICK_Y = 4
    RIGHT_TRIGGER = 5
    D_PAD_X = 6
    D_PAD_Y = 7


class Button(IntEnum):
    """Index of each button in the joystick buttons array (XBOX 1 layout)."""

    A = 0
    B = 1
    X = 2
    Y = 3
    LEFT_BUMPER = 4
    RIGHT_BUMPER = 5
    CHANGE_VIEW = 6
    MENU = 7
    HOME = 8
    LEFT_STICK_CLICK = 9
    RIGHT_STICK_CLICK = 10


# Resting values of axes that are not centred on zero (triggers rest at 1.0).
AXIS_DEFAULTS: dict[Axis, float] = {Axis.LEFT_TRIGGER: 1.0, Axis.RIGHT_TRIGGER: 1.0}


@dataclass
class TwistCommand:
    """A Cartesian velocity command expressed in ``frame_id``."""

    linear: tuple[float, float, float] = (0.0, 0.0, 0.0)
    angular: tuple[float, float, float] = (0.0, 0.0, 0.0)
    frame_id: str = ""
    stamp: float = 0.0


@dataclass
class JointJogCommand:
    """Per-joint velocity command."""

    joint_names: list[str] = field(default_factory=list)
    velocities: list[float] = field(default_factory=list)
    frame_id: str = ""
    stamp: float = 0.0


ServoCommand = Union[TwistCommand, JointJogCommand]


def convert_joy_to_cmd(axes: Sequence[float], buttons: Sequence[int]) -> ServoCommand:
    """Convert joystick axes and buttons to a twist or, if any jog input is active, a joint jog."""
    if (
        buttons[Button.A]
        or buttons[Button.B]
        or buttons[Button.X]
        or buttons[Button.Y]
        or axes[Axis.D_PAD_X]
        or axes[Axis.D_PAD_Y]
    ):
        return JointJogCommand(
            joint_names=["joint_a1", "joint_a2", "joint_a7", "joint_a6"],
            velocities=[
                float(axes[Axis.D_PAD_X]),
                float(axes[Axis.D_PAD_Y]),
                float(buttons[Button.B] - buttons[Button.X]),
                float(buttons[Button.Y] - buttons[Button.A]),
            ],
        )

    lin_x_right = -0.5 * (axes[Axis.RIGHT_TRIGGER] - AXIS_DEFAULTS[Axis.RIGHT_TRIGGER])
    lin_x_left = 0.5 * (axes[Axis.LEFT_TRIGGER] - AXIS_DEFAULTS[Axis.LEFT_TRIGGER])
    roll = float(buttons[Button.RIGHT_BUMPER]) - float(buttons[Button.LEFT_BUMPER])
    return TwistCommand(
        linear=(
            float(lin_x_right + lin_x_left),
            float(axes[Axis.RIGHT_STICK_X]),
            float(axes[Axis.RIGHT_STICK_Y]),
        ),
        angular=(
            float(axes[Axis.LEFT_STICK_X]),
            float(axes[Axis.LEFT_STICK_Y]),
            roll,
        ),
    )


def update_cmd_frame(frame_name: str, buttons: Sequence[int]) -> str:
    """Return the command frame after applying the frame-switching buttons."""
    if buttons[Button.CHANGE_VIEW] and frame_name == EEF_FRAME_ID:
        return BASE_FRAME_ID
    if buttons[Button.MENU] and frame_name == BASE_FRAME_ID:
        return EEF_FRAME_ID
    return frame_name


@dataclass
class SolidPrimitive:
    """A box primitive with its three side lengths."""

    type: str
    dimensions: tuple[float, float, float]


@dataclass
class CollisionObject:
    """A named collision object made of posed primitives."""

    id: str
    frame_id: str
    primitives: list[SolidPrimitive] = field(default_factory=list)
    positions: list[tuple[float, float, float]] = field(default_factory=list)
    operation: str = "add"


@dataclass
class PlanningScene:
    """A planning-scene update holding world collision objects."""

    collision_objects: list[CollisionObject] = field(default_factory=list)
    is_diff: bool = True


def build_collision_scene() -> PlanningScene:
    """Build the planning-scene diff adding the two tables in the way of servoing."""
    box = CollisionObject(id="box", frame_id="world")
    box.primitives.append(SolidPrimitive("box", (0.4, 0.6, 0.03)))
    box.positions.append((0.6, 0.0, 0.4))
    box.primitives.append(SolidPrimitive("box", (0.6, 0.4, 0.03)))
    box.positions.append((0.0, 0.5, 0.25))
    return PlanningScene(collision_objects=[box], is_diff=True)


class JoyToServo:
    """Turns joystick messages into stamped servo commands, tracking the twist frame."""

    def __init__(self) -> None:
        self.frame_to_publish = BASE_FRAME_ID

    def handle_joy(self, axes: Sequence[float], buttons: Sequence[int]) -> ServoCommand:
        """Update the command frame and return the stamped command for this input."""
        self.frame_to_publish = update_cmd_frame(self.frame_to_publish, buttons)
        command = convert_joy_to_cmd(axes, buttons)
        now = time.time()
        if isinstance(command, TwistCommand):
            return replace(command, frame_id=self.frame_to_publish, stamp=now)
        return replace(command, frame_id=JOINT_JOG_FRAME_ID, stamp=now)