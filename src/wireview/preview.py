from __future__ import annotations

import queue
import threading
from pathlib import Path
from typing import Callable, Iterable

import numpy as np
from rich.console import Console
from rich.panel import Panel
from watchfiles import Change, watch

from wireview._config import ViewerSettings, get_viewer_settings
from wireview.frame import PARAMETER_RANGES, Frame, FrameInput, ViewerSession
from wireview.mesh import Wireframe
from wireview.surface import AXIS_COLORS, EDGE_COLOR, Segment, Surface
from wireview.validation import ValidationError

SceneFactory = Callable[[], Wireframe]

# Control panel: sliders stacked down the left edge, in this order.
SLIDER_ORDER = (
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "translate_x",
    "translate_y",
    "translate_z",
    "scale_x",
    "scale_y",
    "scale_z",
    "fov",
    "cam_rotate_x",
    "cam_rotate_y",
    "cam_rotate_z",
    "cam_translate_x",
    "cam_translate_y",
    "cam_translate_z",
)
PANEL_WIDTH = 260


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


def segments_to_polydata(segments: Iterable[Segment], height: float, pv_module):
    """Build line PolyData in surface pixel space (y up, z = 0)."""

    segments = list(segments)
    if not segments:
        return None
    points = np.array(
        [
            point
            for segment in segments
            for point in ((segment.start[0], height - segment.start[1], 0.0), (segment.end[0], height - segment.end[1], 0.0))
        ],
        dtype=float,
    )
    lines = np.hstack([[2, 2 * i, 2 * i + 1] for i in range(len(segments))]).astype(np.int64)
    poly = pv_module.PolyData(points)
    poly.lines = lines
    return poly


class PyVistaViewer:
    """Draw the projected wireframe in a PyVista window driven by slider widgets."""

    def __init__(self, console: Console | None, settings: ViewerSettings | None = None):
        self.console = console or Console()
        self._pv = None
        self.settings = settings or get_viewer_settings()
        self.surface = Surface(self.settings.width, self.settings.height, self.settings.background)

    def show(
        self,
        session: ViewerSession,
        scene_factory: SceneFactory | None = None,
        model_path: Path | None = None,
        watch_files: bool = False,
        target_fps: int = 30,
        screenshot_path: Path | None = None,
    ) -> None:
        pv = self._ensure_backend()
        plotter = pv.Plotter(window_size=(self.settings.width + PANEL_WIDTH, self.settings.height))
        plotter.set_background(self.settings.background)
        frame = session.last_frame or session.submit(FrameInput("none"))
        self._draw(plotter, frame)
        self._frame_surface(plotter)
        self._add_sliders(plotter, session)

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="wireview", auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            return

        if not watch_files or model_path is None or scene_factory is None:
            plotter.show(title="wireview")
            plotter.close()
            return

        reload_queue: queue.Queue[float] = queue.Queue()
        stop_event = threading.Event()
        watcher_thread = threading.Thread(
            target=self._watch_model_file,
            args=(model_path, reload_queue, stop_event),
            name="wireview-watch",
            daemon=True,
        )
        watcher_thread.start()

        def process_queue() -> None:
            reload_requested = False
            while True:
                try:
                    reload_queue.get_nowait()
                    reload_requested = True
                except queue.Empty:
                    break
            if not reload_requested:
                return

            self._reload(plotter, session, scene_factory, model_path)

        def guarded_process_queue() -> None:
            try:
                process_queue()
            except Exception as exc:  # pragma: no cover - surfaced via console
                panel = Panel.fit(str(exc), title="Reload failed", style="red")
                self.console.print(panel)

        interval_seconds = max(1.0 / max(target_fps, 1), 0.05)
        callback_cleanup = self._install_timer_callback(plotter, guarded_process_queue, interval_seconds)

        try:
            plotter.show(title="wireview", auto_close=False)
        finally:
            stop_event.set()
            callback_cleanup()
            plotter.close()

    # Internal helpers -----------------------------------------------------

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for the interactive viewer. Install wireview with `pip install -e .`."
                ) from exc
            self._pv = pv
        return self._pv

    def _draw(self, plotter, frame: Frame) -> None:
        pv = self._ensure_backend()
        segments = self.surface.segments(frame.projected)
        layers = [(f"axis-{axis}", color, 2) for axis, color in zip("xyz", AXIS_COLORS)]
        layers.append(("edges", EDGE_COLOR, 1))
        for name, color, width in layers:
            poly = segments_to_polydata([s for s in segments if s.color == color], self.surface.height, pv)
            if poly is None:
                plotter.remove_actor(name, reset_camera=False)
                continue
            plotter.add_mesh(poly, name=name, color=color, line_width=width, reset_camera=False)

    def _reload(self, plotter, session: ViewerSession, scene_factory: SceneFactory, model_path: Path) -> Frame:
        """Rebuild the model and replay the session's inputs onto it."""

        self.console.print(f"[yellow]Reloading {model_path}…[/yellow]")
        frame = session.reset(scene_factory())
        self._draw(plotter, frame)
        plotter.render()
        self.console.print(f"[green]Reloaded {model_path}[/green]")
        return frame

    def _frame_surface(self, plotter) -> None:
        """Outline the surface and fix a parallel camera on it."""

        pv = self._ensure_backend()
        w, h = float(self.surface.width), float(self.surface.height)
        corners = [((0.0, 0.0), (w, 0.0)), ((w, 0.0), (w, h)), ((w, h), (0.0, h)), ((0.0, h), (0.0, 0.0))]
        border = segments_to_polydata([Segment(a, b, (160, 160, 160)) for a, b in corners], h, pv)
        plotter.add_mesh(border, name="surface", color=(160, 160, 160), line_width=1)
        plotter.enable_parallel_projection()
        plotter.view_xy()
        plotter.reset_camera()

    def _add_sliders(self, plotter, session: ViewerSession) -> None:
        values = session.current_values()
        step = 0.92 / len(SLIDER_ORDER)
        for index, name in enumerate(SLIDER_ORDER):
            rng = PARAMETER_RANGES[name]
            y = 0.96 - index * step
            plotter.add_slider_widget(
                self._slider_callback(plotter, session, name),
                (rng.minimum, rng.maximum),
                value=values[name],
                title=name,
                pointa=(0.01, y),
                pointb=(0.2, y),
                title_height=0.012,
                fmt="%.1f",
                style="modern",
                interaction_event="always",
            )

    def _slider_callback(self, plotter, session: ViewerSession, name: str) -> Callable[[float], None]:
        def on_change(value: float) -> None:
            try:
                frame = session.submit(FrameInput(name, float(value)))
            except ValidationError as exc:
                # The previous frame stays on screen.
                self.console.print(Panel.fit(str(exc), title=f"{name} rejected", style="red"))
                return
            self._draw(plotter, frame)

        return on_change

    def _install_timer_callback(
        self,
        plotter,
        callback: Callable[[], None],
        interval_seconds: float,
    ) -> Callable[[], None]:
        """Install a repeating timer callback compatible with the current PyVista backend."""

        add_callback = getattr(plotter, "add_callback", None)
        if callable(add_callback):
            callback_id = add_callback(callback, interval=interval_seconds)

            def cleanup() -> None:
                remove_callback = getattr(plotter, "remove_callback", None)
                if callable(remove_callback):
                    remove_callback(callback_id)

            return cleanup

        interactor = getattr(plotter, "iren", None)
        if interactor is None:
            raise PreviewBackendError("PyVista interactor unavailable; cannot attach timer callbacks.")

        duration_ms = max(int(interval_seconds * 1000), 10)
        timer_id = interactor.create_timer(duration=duration_ms, repeating=True)
        observer_id = interactor.add_observer("TimerEvent", lambda *_: callback())

        def cleanup() -> None:
            interactor.remove_observer(observer_id)
            interactor.destroy_timer(timer_id)

        return cleanup

    def _watch_model_file(
        self,
        model_path: Path,
        reload_queue: "queue.Queue[float]",
        stop_event: threading.Event,
    ) -> None:
        resolved_model = model_path.resolve()
        watch_root = resolved_model if resolved_model.is_dir() else resolved_model.parent

        for changes in watch(str(watch_root), stop_event=stop_event, debounce=300):
            if stop_event.is_set():
                return

            for change, changed_path in changes:
                if Change.deleted == change and Path(changed_path) == resolved_model:
                    reload_queue.put_nowait(0.0)
                    break
                if Path(changed_path).resolve() == resolved_model:
                    reload_queue.put_nowait(0.0)
                    break
