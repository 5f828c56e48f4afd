"""Services layer"""

from .color_stream_supervisor import ColorStreamSupervisor

__all__ = [
    "ColorStreamSupervisor",
]
