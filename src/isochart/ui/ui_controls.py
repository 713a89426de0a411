"""
UI controls module for isochart.

Connects matplotlib canvas events to the drag and hover state machines and
re-renders the chart when the rotation changes. Also provides snapshot and
reset hotkeys.
"""

import logging
import os
from datetime import datetime

import matplotlib.pyplot as plt

from .. import config
from ..core.projection import RenderState
from ..visualization import renderer
from ..visualization.scene import build_scene
from .interaction import DragRotation, HoverTracker

logger = logging.getLogger(__name__)


class UIController:
    """Interactive controller owning the rotation and hover state of one chart."""

    def __init__(self, fig, ax, data, options, state=None, output_dir=None):
        """
        Initialize UI controller.

        Args:
            fig: Matplotlib figure
            ax: Axes covering the canvas
            data: sample grid indexed [column][row]
            options (ChartOptions): chart configuration
            state (RenderState): initial rotation
            output_dir (str): where snapshots are written
        """
        self.fig = fig
        self.ax = ax
        self.data = data
        self.options = options
        self.state = state or RenderState()
        self.output_dir = output_dir or config.DEFAULT_OUTPUT_DIR

        self.drag = DragRotation()
        self.hover = HoverTracker(on_change=self._on_hover_change)
        self.scene = None
        self.artists = None
        self.connected_handlers = []

        self.render()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self):
        """Rebuild the scene for the current state and redraw the axes."""
        self.scene = build_scene(self.data, self.state, self.options, hover=self.hover.hover)
        self.artists = renderer.draw_scene(self.ax, self.scene, self.options.gradient_resolution)
        self.hover.set_targets(self.scene.markers, self.options.hit_radius)
        self.fig.canvas.draw_idle()

    def set_state(self, state):
        """Apply a new rotation and re-render if it changed."""
        if state is None or state == self.state:
            return
        self.state = state
        self.render()

    # ------------------------------------------------------------------
    # Event wiring
    # ------------------------------------------------------------------

    def connect_events(self):
        """Connect all event handlers."""
        self.disconnect_events()
        canvas = self.fig.canvas
        self.connected_handlers = [
            canvas.mpl_connect('button_press_event', self.handle_press),
            canvas.mpl_connect('button_release_event', self.handle_release),
            canvas.mpl_connect('motion_notify_event', self.handle_motion),
            canvas.mpl_connect('axes_leave_event', self.handle_leave),
            canvas.mpl_connect('figure_leave_event', self.handle_leave),
            canvas.mpl_connect('key_press_event', self.handle_key),
        ]
        logger.debug("Connected %d event handlers", len(self.connected_handlers))

    def disconnect_events(self):
        for cid in self.connected_handlers:
            self.fig.canvas.mpl_disconnect(cid)
        self.connected_handlers = []

    def _page_position(self, event):
        """Event position in page coordinates (matplotlib display y grows upward)."""
        return event.x, self.fig.bbox.height - event.y

    def handle_press(self, event):
        if event.x is None or event.y is None:
            return
        px, py = self._page_position(event)
        self.drag.press(px, py, self.state)

    def handle_release(self, event):
        self.drag.release()

    def handle_leave(self, event):
        self.drag.release()
        self.hover.leave()

    def handle_motion(self, event):
        if event.x is None or event.y is None:
            return
        if self.drag.active:
            px, py = self._page_position(event)
            self.set_state(self.drag.move(px, py))
            return
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            self.hover.leave()
            return
        self.hover.update(event.xdata, event.ydata)

    def handle_key(self, event):
        if event.key == config.SNAPSHOT_HOTKEY:
            self.save_snapshot()
        elif event.key == config.RESET_ROTATION_HOTKEY:
            self.set_state(RenderState())

    def _on_hover_change(self, previous, current):
        if self.artists is None:
            return
        color = self.options.grid_color
        if previous is not None:
            renderer.set_marker_hover(self.artists, previous, False, color)
        if current is not None:
            renderer.set_marker_hover(self.artists, current, True, color)
        self.fig.canvas.draw_idle()

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def save_snapshot(self, extension='png'):
        """
        Save the current view into a timestamped file in the output directory.

        Returns:
            str: path of the saved snapshot
        """
        os.makedirs(self.output_dir, exist_ok=True)
        ts = datetime.now().strftime('%Y%m%d_%H%M%S')
        path = os.path.join(self.output_dir, f'isochart_{ts}.{extension}')
        self.fig.savefig(path, dpi=self.fig.dpi)
        logger.info("Saved snapshot to %s", path)
        return path


def launch_interactive(data, options, state=None, output_dir=None):
    """
    Open an interactive window for the chart and block until it is closed.

    Returns:
        UIController: the controller of the closed window
    """
    fig, ax = renderer.setup_figure_layout(options.width, options.height)
    manager = getattr(fig.canvas, 'manager', None)
    if manager is not None:
        manager.set_window_title(config.WINDOW_TITLE)
    controller = UIController(fig, ax, data, options, state=state, output_dir=output_dir)
    controller.connect_events()
    logger.info("Drag to rotate, '%s' saves a snapshot, '%s' resets the rotation",
                config.SNAPSHOT_HOTKEY, config.RESET_ROTATION_HOTKEY)
    plt.show()
    return controller
