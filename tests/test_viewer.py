import pytest

from wellenkugel.config import ViewerSettings
from wellenkugel.model import SurfaceModel
from wellenkugel.viewer import SurfaceViewer
from wellenkugel.visualization.backends import NOPGraphicsBackend, NOPWindowBackend, ShaderBuildError
from wellenkugel.visualization.backends.base import Action, Key, MouseButton


def make_viewer(**settings):
    graphics = NOPGraphicsBackend()
    windows = NOPWindowBackend()
    viewer = SurfaceViewer(
        SurfaceModel(4, 4),
        ViewerSettings(**settings),
        graphics=graphics,
        window_backend=windows,
    )
    return viewer, graphics, windows


def test_run_frames():
    viewer, graphics, windows = make_viewer(width=320, height=240)
    assert viewer.run(max_frames=3) == 3
    window = windows.windows[0]
    assert (window.title, window.framebuffer_size()) == ("Wellenkugel", (320, 240))
    assert window.swaps == 3
    assert windows.polls == 3
    assert graphics.meshes[0].draws == 3
    assert graphics.viewport == (0, 0, 320, 240)
    assert window.should_close()
    assert viewer.handle is None
    assert windows.terminations == 1


def test_escape_stops_loop():
    viewer, graphics, windows = make_viewer()
    viewer.open()
    windows.windows[0].emit_key(Key.ESCAPE)
    assert viewer.run() == 0
    assert graphics.meshes[0].deleted is True


def test_keys_reach_model():
    viewer, graphics, windows = make_viewer()
    viewer.open()
    window = windows.windows[0]
    window.emit_key(Key.RIGHT_BRACKET)
    window.emit_key(Key.RIGHT_BRACKET, Action.RELEASE)
    viewer.run(max_frames=1)
    assert viewer.model.resolution == (5, 4)
    assert len(graphics.meshes) == 2


def test_mouse_reaches_camera():
    viewer, graphics, windows = make_viewer()
    viewer.open()
    window = windows.windows[0]
    window.emit_mouse_button(MouseButton.LEFT, Action.PRESS)
    window.emit_cursor(10.0, 10.0)
    window.emit_cursor(40.0, 20.0)
    window.emit_scroll(0.0, 2.0)
    assert viewer.camera.rotation[0, 0] != 1.0
    assert viewer.camera.distance == pytest.approx(76.0)
    viewer.close()


def test_light_moves_with_time():
    viewer, graphics, windows = make_viewer()
    viewer.open()
    window = windows.windows[0]
    viewer.render_frame()
    first = graphics.shaders[0].uniforms["u_light_position"].copy()
    window.advance(1000.0)
    viewer.render_frame()
    assert not (graphics.shaders[0].uniforms["u_light_position"] == first).all()
    viewer.close()


class FailingShaderBackend(NOPGraphicsBackend):
    def create_shader(self, vertex_source, fragment_source):
        raise ShaderBuildError("link", "error: unresolved symbol")


def test_shader_failure_propagates():
    viewer = SurfaceViewer(SurfaceModel(2, 2), graphics=FailingShaderBackend(), window_backend=NOPWindowBackend())
    with pytest.raises(ShaderBuildError):
        viewer.open()


def test_shader_failure_in_run_closes_window_once():
    windows = NOPWindowBackend()
    viewer = SurfaceViewer(SurfaceModel(2, 2), graphics=FailingShaderBackend(), window_backend=windows)
    with pytest.raises(ShaderBuildError):
        viewer.run()
    assert windows.windows[0].should_close()
    assert windows.terminations == 1
    assert viewer.handle is None


def test_requires_backends():
    with pytest.raises(RuntimeError):
        SurfaceViewer(SurfaceModel(2, 2))


def test_resize_changes_viewport():
    viewer, graphics, windows = make_viewer(width=300, height=300)
    viewer.open()
    window = windows.windows[0]
    window.emit_resize(640, 320)
    viewer.render_frame()
    assert graphics.viewport == (0, 0, 640, 320)
    assert viewer.camera.aspect == 2.0
    viewer.close()
