from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "host": "127.0.0.1",
    "port": 8765,
    "allowed_extensions": [".docx"],
    "max_upload_mb": 10,
    "celebrate_delay_ms": 500,
    "log_level": "INFO",
}


@dataclass
class Settings:
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]
    allowed_extensions: list[str] = field(default_factory=lambda: list(DEFAULTS["allowed_extensions"]))
    max_upload_mb: int = DEFAULTS["max_upload_mb"]
    celebrate_delay_ms: int = DEFAULTS["celebrate_delay_ms"]
    log_level: str = DEFAULTS["log_level"]

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def update(self, values: dict) -> None:
        """Apply known keys, coerced to each field's type.

        Raises ValueError before touching anything if one value is bad.
        """
        if not isinstance(values, dict):
            raise ValueError("settings must be a JSON object")
        coerced = {k: _coerce(k, v) for k, v in values.items() if k in DEFAULTS}
        for k, v in coerced.items():
            setattr(self, k, v)


def _coerce(name: str, value):
    default = DEFAULTS[name]
    if isinstance(default, list):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{name} must be a list of strings")
        return [v.lower() for v in value]
    if isinstance(default, int):
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must be an integer") from e
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def load_settings(path: Path | None = None) -> Settings:
    """Defaults overlaid with config.json; unknown keys are ignored."""
    path = path or CONFIG_PATH
    settings = Settings()
    if path.exists():
        settings.update(json.loads(path.read_text()))
    return settings


def save_settings(settings: Settings, path: Path | None = None) -> None:
    (path or CONFIG_PATH).write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
