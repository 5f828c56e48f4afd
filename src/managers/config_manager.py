"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files, applies command-line overrides and builds AppConfig.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.config import AppConfig, ConfigError, LEDStripConfig, PixelWindow, WebConfig
from models.enums import LEDStripType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Falls back to factory_defaults.yaml when config.yaml cannot be read.

    Example:
        config_manager = ConfigManager()
        config = config_manager.load(overrides={"web.url": "http://pc.local:8080"})

        config.web.url
        config.led_strip.window.last_pixel
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative paths resolve against src/)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = self._resolve(config_path)
        self.factory_defaults_path = self._resolve(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None

    @staticmethod
    def _resolve(path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else SRC_DIR / path

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> AppConfig:
        """
        Load YAML configuration and build AppConfig

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Fallback to factory defaults on failure
        4. Apply dotted-key overrides ({"led_strip.count": 30}); None values are skipped
        5. Parse and validate

        Raises:
            ConfigError: a value is invalid (no fallback for those)
        """
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration", path=str(self.config_path))
                include_list = main_config.pop('include')
                self.data = self._load_with_includes(include_list, self.config_path.parent)
                self._merge(self.data, main_config)
            else:
                log.info("Using monolithic configuration", path=str(self.config_path))
                self.data = main_config

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            with open(self.factory_defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        for key, value in (overrides or {}).items():
            if value is not None:
                self._set_dotted(self.data, key, value)
                log.debug("Override applied", key=key, value=value)

        self.config = self._parse(self.data)
        return self.config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["web.yaml", "led_strip.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        self._merge(merged, file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())))
        return merged

    @staticmethod
    def _merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """Merge source into target; nested sections merge key by key."""
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                target[key].update(value)
            else:
                target[key] = value

    @staticmethod
    def _set_dotted(data: Dict[str, Any], key: str, value: Any) -> None:
        section, _, name = key.rpartition(".")
        node = data
        if section:
            for part in section.split("."):
                node = node.setdefault(part, {})
        node[name] = value

    # ------------------------------------------------------
    # PARSER
    # ------------------------------------------------------

    def _parse(self, data: Dict[str, Any]) -> AppConfig:
        web_raw = data.get("web") or {}
        strip_raw = data.get("led_strip") or {}

        try:
            web = WebConfig(
                url=str(web_raw.get("url", WebConfig.url)),
                request_timeout=self._optional_float(web_raw.get("request_timeout")),
                reconnect_delay=float(web_raw.get("reconnect_delay", WebConfig.reconnect_delay)),
                stop_timeout=float(web_raw.get("stop_timeout", WebConfig.stop_timeout)),
                queue_size=int(web_raw.get("queue_size", WebConfig.queue_size)),
            )

            window = PixelWindow.resolve(
                led_count=int(strip_raw.get("count", 1)),
                first_pixel=int(strip_raw.get("first_pixel", 0)),
                last_pixel=int(strip_raw.get("last_pixel", -1)),
            )

            led_strip = LEDStripConfig(
                type=self._parse_strip_type(strip_raw.get("type", LEDStripType.WS2812_5V.value)),
                window=window,
                gpio=int(strip_raw.get("gpio", 18)),
                intensity=int(strip_raw.get("intensity", 80)),
                color_order=str(strip_raw.get("color_order", "GRB")).upper(),
                frequency_hz=int(strip_raw.get("frequency_hz", 800_000)),
                dma_channel=int(strip_raw.get("dma_channel", 10)),
                invert=bool(strip_raw.get("invert", False)),
                channel=int(strip_raw.get("channel", 0)),
            )
        except (TypeError, ValueError) as ex:
            if isinstance(ex, ConfigError):
                raise
            raise ConfigError(f"Invalid configuration value: {ex}") from ex

        log.info(
            "Configuration loaded",
            web=web.url,
            strip=led_strip.type.value,
            pixels=f"{window.first_pixel}-{window.last_pixel} of {window.led_count}",
            intensity=led_strip.intensity,
        )
        return AppConfig(web=web, led_strip=led_strip)

    @staticmethod
    def _optional_float(value) -> Optional[float]:
        return None if value is None else float(value)

    @staticmethod
    def _parse_strip_type(value) -> LEDStripType:
        if isinstance(value, LEDStripType):
            return value
        try:
            return LEDStripType[str(value).upper()]
        except KeyError:
            raise ConfigError(
                f"Invalid LEDStripType: {value} (one of {[t.value for t in LEDStripType]})"
            ) from None
