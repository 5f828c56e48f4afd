import sys
import importlib.util


class RuntimeInfo:
    """Probes for the platform and optional hardware libraries."""

    @classmethod
    def is_linux(cls) -> bool:
        return sys.platform.startswith("linux")

    @classmethod
    def is_raspberry_pi(cls) -> bool:
        if not cls.is_linux():
            return False
        try:
            with open("/proc/cpuinfo", "r") as f:
                return "Raspberry Pi" in f.read()
        except OSError:
            return False

    @classmethod
    def has_ws281x(cls) -> bool:
        return cls.has_module("rpi_ws281x")

    @classmethod
    def has_module(cls, module_name: str) -> bool:
        try:
            return importlib.util.find_spec(module_name) is not None
        except (ImportError, ValueError):
            return False
