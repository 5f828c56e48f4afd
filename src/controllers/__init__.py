from .color_mirror_controller import ColorMirrorController, render_window

__all__ = [
    'ColorMirrorController',
    'render_window',
]
