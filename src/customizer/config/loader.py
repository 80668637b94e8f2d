"""
Configuration loader for customizer screen definitions
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..header import CustomHeader
from ..manager import CustomizeManager
from ..utils.errors import ConfigurationError, MediaError

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

# Top-level sections and the type each one must have
SECTIONS = {
    "theme_support": dict,
    "pages": list,
    "capabilities": list,
    "header": dict,
    "settings": dict,
    "values": dict,
    "media": list,
    "widgets": dict,
    "controls": dict,
    "control_types": list,
}


class ConfigLoader:
    """Loads and validates YAML screen definitions"""

    def load(self, config_path: str) -> Dict[str, Any]:
        """
        Load a screen definition from a YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Validated configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config file is invalid or too large
        """
        resolved_path = Path(config_path).expanduser().resolve()

        if resolved_path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {resolved_path}")

        if not resolved_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {resolved_path}")

        if resolved_path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {resolved_path.suffix}. "
                f"Expected .yaml or .yml"
            )

        file_size = resolved_path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(resolved_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

        if config is None:
            config = {}

        self._validate(config)
        config = self._apply_defaults(config)
        config["base_dir"] = str(resolved_path.parent)

        logger.info(f"Loaded configuration from {resolved_path}")
        return config

    def _validate(self, config: Any) -> None:
        """Validate configuration structure"""
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        for section, expected in SECTIONS.items():
            if section in config and config[section] is not None and not isinstance(config[section], expected):
                raise ConfigurationError(f"'{section}' must be a {expected.__name__}")

        for control_id, control in (config.get("controls") or {}).items():
            if control is not None and not isinstance(control, dict):
                raise ConfigurationError(f"Control '{control_id}' must be a dictionary")

        for setting_id, setting in (config.get("settings") or {}).items():
            if setting is not None and not isinstance(setting, dict):
                raise ConfigurationError(f"Setting '{setting_id}' must be a dictionary")

        for index, item in enumerate(config.get("media") or []):
            if not isinstance(item, dict) or not item.get("url"):
                raise ConfigurationError(f"Media item {index + 1} must be a dictionary with a 'url'")

        for page in config.get("pages") or []:
            if not isinstance(page, dict) or "id" not in page:
                raise ConfigurationError("Each page must be a dictionary with an 'id'")

    def _apply_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply default values to configuration"""
        for section, expected in SECTIONS.items():
            if config.get(section) is None:
                config[section] = expected()

        for control_id in list(config["controls"]):
            if config["controls"][control_id] is None:
                config["controls"][control_id] = {}

        for setting_id in list(config["settings"]):
            if config["settings"][setting_id] is None:
                config["settings"][setting_id] = {}

        return config


def build_manager(config: Dict[str, Any], base_dir: Optional[str] = None) -> CustomizeManager:
    """
    Build a populated manager from a loaded configuration.

    Args:
        config: Dictionary returned by ``ConfigLoader.load()``
        base_dir: Directory that relative media paths are resolved against

    Returns:
        CustomizeManager with settings, values, media, widgets and controls registered

    Raises:
        ConfigurationError: If a section references something that cannot be built
    """
    base_dir = base_dir or config.get("base_dir") or "."

    custom_header = None
    header_config = config.get("header") or {}
    if header_config or "custom-header" in (config.get("theme_support") or {}):
        custom_header = CustomHeader(
            header_config.get("template_directory_uri", ""),
            random_default=bool(header_config.get("random_default", False)),
        )
        custom_header.register_default_headers(header_config.get("defaults") or {})

    manager = CustomizeManager(
        theme_support=config.get("theme_support"),
        pages=config.get("pages"),
        capabilities=config.get("capabilities") or None,
        custom_header=custom_header,
    )

    for setting_id, setting in (config.get("settings") or {}).items():
        try:
            manager.add_setting(setting_id, **setting)
        except TypeError as e:
            raise ConfigurationError(f"Invalid setting '{setting_id}': {e}") from e

    for setting_id, value in (config.get("values") or {}).items():
        manager.set_value(setting_id, value)

    for item in config.get("media") or []:
        item = dict(item)
        url = item.pop("url")
        path = item.pop("path", None)
        if path and not Path(path).is_absolute():
            path = str(Path(base_dir) / path)
        try:
            attachment_id = manager.media.add_attachment(url, path=path, **item)
        except (TypeError, MediaError) as e:
            raise ConfigurationError(f"Invalid media item '{url}': {e}") from e
        if custom_header and (item.get("meta") or {}).get("header"):
            model = manager.media.prepare_attachment_for_js(attachment_id)
            custom_header.add_uploaded_header(
                url,
                attachment_id=attachment_id,
                width=model.get("width"),
                height=model.get("height"),
            )

    for widget_id, widget in (config.get("widgets") or {}).items():
        widget = widget or {}
        form_html = widget.get("form")
        manager.widgets.register(
            widget_id,
            widget.get("name", widget_id),
            form=(lambda args, html=form_html: html) if form_html else None,
            params=widget.get("params"),
        )
        if widget.get("rendered"):
            manager.widgets.mark_rendered(widget_id)

    for control_type in config.get("control_types") or []:
        control_class = manager.control_types.get_control_class(control_type)
        if control_class is None:
            raise ConfigurationError(f"Unknown control type: {control_type}")
        manager.register_control_type(control_class)

    for control_id, control in (config.get("controls") or {}).items():
        try:
            manager.add_control(control_id, **control)
        except TypeError as e:
            raise ConfigurationError(f"Invalid control '{control_id}': {e}") from e

    logger.info(
        f"Built customizer with {len(manager.settings())} settings "
        f"and {len(manager.controls())} controls"
    )
    return manager
