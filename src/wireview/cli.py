from __future__ import annotations

import importlib.util
import pathlib
import sys
import traceback
from dataclasses import dataclass
from types import ModuleType
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from wireview._config import ViewerSettings, get_viewer_settings
from wireview.frame import PARAMETERS, SceneState, ViewerSession, apply_input, initial_inputs, render_frame
from wireview.mesh import Wireframe
from wireview.primitives import make_cube
from wireview.readout import ConsoleReadout, vertex_table
from wireview.surface import Surface
from wireview.validation import ValidationError

console = Console()
app = typer.Typer(help="Transform, project and draw a wireframe from the command line.")


@dataclass(frozen=True)
class ViewOptions:
    watch: bool
    target_fps: int


class ModelBuildError(RuntimeError):
    """Raised when a model module cannot provide a usable wireframe."""


def _load_module(path: pathlib.Path) -> ModuleType:
    module_name = "wireview_user_model"
    if module_name in sys.modules:
        del sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise typer.BadParameter(f"Unable to import model at {path}")

    module = importlib.util.module_from_spec(spec)
    # Register module so features relying on sys.modules (e.g., dataclasses) work.
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def _scene_factory_from_module(model_path: pathlib.Path | None) -> Callable[[], Wireframe]:
    if model_path is None:
        return make_cube

    def factory() -> Wireframe:
        module = _load_module(model_path)
        builder = getattr(module, "build", None)
        if builder is None or not callable(builder):
            raise ModelBuildError(f"{model_path} must define a callable build() function.")
        wireframe = builder()
        if not isinstance(wireframe, Wireframe):
            raise ModelBuildError(f"{model_path} build() must return a wireview Wireframe.")
        return wireframe

    return factory


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def _check_model(model: pathlib.Path | None) -> None:
    if model is not None and not model.exists():
        raise typer.BadParameter(f"Model path {model} does not exist.")


def _build_state(
    model: pathlib.Path | None,
    settings: ViewerSettings,
    values: dict[str, Optional[float]],
) -> SceneState:
    """Load the model and apply the given parameter values to it."""

    try:
        wireframe = _scene_factory_from_module(model)()
    except ModelBuildError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except Exception as exc:
        raise typer.BadParameter(f"Model execution failed: {exc}") from exc

    state = SceneState(wireframe=wireframe, fov=settings.fov)
    try:
        for frame_input in initial_inputs(values):
            state = apply_input(state, frame_input)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return state


def _rotate_option():
    return typer.Option(None, min=0.0, max=360.0, help="Rotation in degrees.")


def _translate_option():
    return typer.Option(None, min=-10.0, max=10.0, help="Offset along the axis.")


def _scale_option():
    return typer.Option(None, min=0.1, max=3.0, help="Scale factor along the axis.")


@app.command()
def view(
    model: Optional[pathlib.Path] = typer.Argument(None, help="Python module whose build() returns a Wireframe."),
    watch: bool = typer.Option(True, help="Watch the model file for changes and hot-reload."),
    target_fps: int = typer.Option(30, min=1, max=240, help="Reload polling budget."),
    screenshot: Optional[pathlib.Path] = typer.Option(
        None, "--screenshot", help="Save a screenshot of the first frame and exit."
    ),
    table: bool = typer.Option(False, "--table/--no-table", help="Print the vertex table after every frame."),
) -> None:
    """
    Open the interactive viewer with sliders for every transform parameter.
    """

    from wireview.preview import PreviewBackendError, PyVistaViewer

    _check_model(model)
    opts = ViewOptions(watch=watch and model is not None, target_fps=target_fps)
    settings = get_viewer_settings()

    scene_factory = _scene_factory_from_module(model)
    try:
        initial = scene_factory()
    except Exception as exc:
        if not opts.watch:
            raise typer.BadParameter(f"Model execution failed: {exc}") from exc
        panel = Panel.fit(_format_exception(exc), title="Initial build failed, falling back to the cube", style="red")
        console.print(panel)
        initial = make_cube()

    console.rule("wireview")
    console.print(f"Using model [green]{model or 'built-in cube'}[/green]")
    if opts.watch:
        console.print("[cyan]Watching for changes: save to hot reload, close the window to stop.[/cyan]")

    session = ViewerSession(SceneState(wireframe=initial, fov=settings.fov))
    if table:
        session.subscribe(ConsoleReadout(console))

    viewer = PyVistaViewer(console=console, settings=settings)
    try:
        viewer.show(
            session,
            scene_factory=scene_factory,
            model_path=model,
            watch_files=opts.watch,
            target_fps=opts.target_fps,
            screenshot_path=screenshot,
        )
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def snapshot(
    model: Optional[pathlib.Path] = typer.Argument(None, help="Python module whose build() returns a Wireframe."),
    output: pathlib.Path = typer.Option(
        pathlib.Path("wireframe.png"),
        "--output",
        "-o",
        help="Path to the PNG that will be produced.",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing image."),
    width: Optional[int] = typer.Option(None, min=1, help="Surface width in pixels (defaults to config)."),
    height: Optional[int] = typer.Option(None, min=1, help="Surface height in pixels (defaults to config)."),
    rotate_x: Optional[float] = _rotate_option(),
    rotate_y: Optional[float] = _rotate_option(),
    rotate_z: Optional[float] = _rotate_option(),
    translate_x: Optional[float] = _translate_option(),
    translate_y: Optional[float] = _translate_option(),
    translate_z: Optional[float] = _translate_option(),
    scale_x: Optional[float] = _scale_option(),
    scale_y: Optional[float] = _scale_option(),
    scale_z: Optional[float] = _scale_option(),
    cam_rotate_x: Optional[float] = _rotate_option(),
    cam_rotate_y: Optional[float] = _rotate_option(),
    cam_rotate_z: Optional[float] = _rotate_option(),
    cam_translate_x: Optional[float] = _translate_option(),
    cam_translate_y: Optional[float] = _translate_option(),
    cam_translate_z: Optional[float] = _translate_option(),
    fov: Optional[float] = typer.Option(
        None, min=15.0, max=180.0, help="Field of view in degrees (defaults to config)."
    ),
) -> None:
    """
    Apply the given parameters once and draw the projected wireframe to a PNG.
    """

    values = {key: value for key, value in locals().items() if key in PARAMETERS}
    _check_model(model)
    settings = get_viewer_settings()
    frame = render_frame(_build_state(model, settings, values))

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    surface = Surface(width or settings.width, height or settings.height, settings.background)
    surface.save(frame.projected, final_output)
    console.print(
        Panel(
            f"Wrote {surface.width}x{surface.height} PNG to [green]{final_output}[/green].",
            title="Snapshot complete",
            border_style="green",
        )
    )


@app.command()
def table(
    model: Optional[pathlib.Path] = typer.Argument(None, help="Python module whose build() returns a Wireframe."),
    rotate_x: Optional[float] = _rotate_option(),
    rotate_y: Optional[float] = _rotate_option(),
    rotate_z: Optional[float] = _rotate_option(),
    translate_x: Optional[float] = _translate_option(),
    translate_y: Optional[float] = _translate_option(),
    translate_z: Optional[float] = _translate_option(),
    scale_x: Optional[float] = _scale_option(),
    scale_y: Optional[float] = _scale_option(),
    scale_z: Optional[float] = _scale_option(),
) -> None:
    """
    Print the transformed (pre-projection) vertices of the model.
    """

    values = {key: value for key, value in locals().items() if key in PARAMETERS}
    _check_model(model)
    state = _build_state(model, get_viewer_settings(), values)
    console.print(vertex_table(state.wireframe.vertices))
