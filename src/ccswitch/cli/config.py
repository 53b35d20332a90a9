"""Per-user CLI settings stored as JSON under the XDG config directory."""

import json
from pathlib import Path
from typing import Any


def get_config_dir() -> Path:
    """``~/.config/ccswitch``, created on first use."""
    config_dir = Path.home() / ".config" / "ccswitch"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file() -> Path:
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Stored settings; empty when nothing has been saved yet."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    data: dict[str, Any] = json.loads(config_file.read_text(encoding="utf-8"))
    return data


def save_config(config: dict[str, Any]) -> None:
    """Write settings, readable by the owner only since they hold the API key."""
    config_file = get_config_file()
    config_file.write_text(json.dumps(config, indent=2), encoding="utf-8")
    config_file.chmod(0o600)


def get_config_value(key: str, default: Any = None) -> Any:
    return load_config().get(key, default)


def set_config_value(key: str, value: Any) -> None:
    config = load_config()
    config[key] = value
    save_config(config)
