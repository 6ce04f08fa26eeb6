from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Literal, Mapping, Protocol, Sequence, get_args

from .algebra import Vector4
from .camera import Camera
from .mesh import Wireframe
from .primitives import make_cube
from .projection import ProjectedWireframe, project
from .validation import ValidationError

Parameter = Literal[
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "translate_x",
    "translate_y",
    "translate_z",
    "scale_x",
    "scale_y",
    "scale_z",
    "cam_rotate_x",
    "cam_rotate_y",
    "cam_rotate_z",
    "cam_translate_x",
    "cam_translate_y",
    "cam_translate_z",
    "fov",
    "none",
]

PARAMETERS: tuple[str, ...] = get_args(Parameter)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


# External spellings (rotateX, camTranslateZ, ...) accepted at the input boundary.
PARAMETER_ALIASES: dict[str, str] = {_camel(name): name for name in PARAMETERS if "_" in name}


@dataclass(frozen=True)
class ParameterRange:
    minimum: float
    maximum: float
    default: float


_ROTATION = ParameterRange(0.0, 360.0, 0.0)
_TRANSLATION = ParameterRange(-10.0, 10.0, 0.0)
_SCALE = ParameterRange(0.1, 3.0, 1.0)

# Bounds for the control surfaces; the pipeline itself does not clamp.
PARAMETER_RANGES: dict[str, ParameterRange] = {
    **{f"rotate_{a}": _ROTATION for a in "xyz"},
    **{f"translate_{a}": _TRANSLATION for a in "xyz"},
    **{f"scale_{a}": _SCALE for a in "xyz"},
    **{f"cam_rotate_{a}": _ROTATION for a in "xyz"},
    **{f"cam_translate_{a}": _TRANSLATION for a in "xyz"},
    "fov": ParameterRange(15.0, 180.0, 90.0),
}


@dataclass(frozen=True)
class FrameInput:
    """One control change: the parameter that moved and its new absolute value."""

    parameter: Parameter
    value: float = 0.0

    def __post_init__(self) -> None:
        name = PARAMETER_ALIASES.get(self.parameter, self.parameter)
        if name not in PARAMETERS:
            raise ValidationError(f"Unknown parameter {self.parameter!r}.")
        object.__setattr__(self, "parameter", name)


@dataclass(frozen=True)
class SceneState:
    wireframe: Wireframe = field(default_factory=make_cube)
    camera: Camera = field(default_factory=Camera)
    fov: float = 90.0


@dataclass(frozen=True)
class Frame:
    state: SceneState
    projected: ProjectedWireframe
    vertices: tuple[Vector4, ...]


class FrameListener(Protocol):
    def on_frame(self, frame: Frame) -> None: ...


def apply_input(state: SceneState, frame_input: FrameInput) -> SceneState:
    """Return the scene after applying one parameter change."""

    name = frame_input.parameter
    value = float(frame_input.value)
    if name == "none":
        return state
    if name == "fov":
        return replace(state, fov=value)

    family, axis = name.rsplit("_", 1)
    if family.startswith("cam_"):
        camera = state.camera
        op = getattr(camera, family[len("cam_"):])
        return replace(state, camera=op(axis, value))

    wireframe = state.wireframe
    op = {"rotate": wireframe.rotate, "translate": wireframe.translate, "scale": wireframe.scale}[family]
    return replace(state, wireframe=op(axis, value))


def render_frame(state: SceneState) -> Frame:
    projected = project(state.wireframe, state.camera, state.fov)
    return Frame(state=state, projected=projected, vertices=state.wireframe.vertices)


def initial_inputs(values: Mapping[str, float | None]) -> list[FrameInput]:
    """One input per parameter given a value in `values`, in `PARAMETERS` order.

    Values equal to the slider default are kept: a model may start away from
    the default, and resending a value it already holds changes nothing.
    """

    return [
        FrameInput(name, float(values[name]))
        for name in PARAMETERS
        if name != "none" and values.get(name) is not None
    ]


class ViewerSession:
    """Holds the current scene and pushes every completed frame to listeners.

    A failing input leaves the session on its previous state. Every applied
    input is kept in order so a reload can rebuild the same scene; object
    rotations and translations follow the object's own axes and do not commute.
    """

    def __init__(self, state: SceneState | None = None, listeners: Sequence[FrameListener] = ()) -> None:
        self.state = state or SceneState()
        self._base = self.state
        self._history: list[FrameInput] = []
        self._listeners: list[FrameListener] = list(listeners)
        self.last_frame: Frame | None = None

    @property
    def history(self) -> tuple[FrameInput, ...]:
        """Inputs applied since the base scene, oldest first."""
        return tuple(self._history)

    def subscribe(self, listener: FrameListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: FrameListener) -> None:
        self._listeners.remove(listener)

    def _record(self, inputs: Iterable[FrameInput]) -> None:
        for frame_input in inputs:
            if frame_input.parameter == "none":
                continue
            # Back-to-back changes of one parameter act on the same axis, so only the last value matters.
            if self._history and self._history[-1].parameter == frame_input.parameter:
                self._history[-1] = frame_input
            else:
                self._history.append(frame_input)

    def _commit(self, state: SceneState) -> Frame:
        frame = render_frame(state)
        self.state = state
        self.last_frame = frame
        for listener in self._listeners:
            listener.on_frame(frame)
        return frame

    def submit(self, frame_input: FrameInput) -> Frame:
        frame = self._commit(apply_input(self.state, frame_input))
        self._record([frame_input])
        return frame

    def replay(self, inputs: Iterable[FrameInput]) -> Frame:
        """Apply several inputs and notify listeners once with the final frame."""

        inputs = list(inputs)
        state = self.state
        for frame_input in inputs:
            state = apply_input(state, frame_input)
        frame = self._commit(state)
        self._record(inputs)
        return frame

    def reset(self, wireframe: Wireframe, inputs: Iterable[FrameInput] | None = None) -> Frame:
        """Swap in fresh base geometry and rebuild the scene on top of it.

        With no `inputs` the session history is replayed in the order it was
        applied, camera and fov included, starting from the base scene.
        """

        inputs = list(self._history if inputs is None else inputs)
        base = replace(self._base, wireframe=wireframe)
        state = base
        for frame_input in inputs:
            state = apply_input(state, frame_input)
        frame = self._commit(state)
        self._base = base
        self._history = []
        self._record(inputs)
        return frame

    def current_values(self) -> dict[str, float]:
        """Absolute value of every parameter as the session last applied it."""

        obj = self.state.wireframe.state
        cam = self.state.camera.state
        values: dict[str, float] = {"fov": self.state.fov}
        for index, axis in enumerate("xyz"):
            values[f"rotate_{axis}"] = obj.rotation[index]
            values[f"translate_{axis}"] = obj.translation[index]
            values[f"scale_{axis}"] = obj.scale[index]
            values[f"cam_rotate_{axis}"] = cam.rotation[index]
            values[f"cam_translate_{axis}"] = cam.translation[index]
        return values
