from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

DEFAULT_SETTINGS_PATH = "settings.json"

STRING_FIELDS = ("seed", "input_dir", "output_dir")
# (min_field, max_field, allow_empty_range)
RANGE_FIELDS = (
    ("min_distance", "max_distance", False),
    ("min_id", "max_id", False),
    ("min_buildings", "max_buildings", True),
    ("min_npcs", "max_npcs", True),
    ("min_rooms", "max_rooms", False),
    ("min_containers", "max_containers", True),
)


@dataclass(frozen=True)
class GeneratorSettings:
    seed: str = "Generate"
    num_of_towns: int = 15
    num_of_connections: int = 20
    min_distance: int = 10
    max_distance: int = 100
    cost: int = 5
    min_id: int = 1
    max_id: int = 100000
    min_buildings: int = 5
    max_buildings: int = 25
    min_npcs: int = 2
    max_npcs: int = 10
    min_rooms: int = 2
    max_rooms: int = 6
    min_containers: int = 0
    max_containers: int = 4
    input_dir: str = "input"
    output_dir: str = "output"

    def validate(self) -> None:
        for name in STRING_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string")
        for item in fields(self):
            if item.name in STRING_FIELDS:
                continue
            value = getattr(self, item.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{item.name} must be an integer")
            if value < 0:
                raise ValueError(f"{item.name} must be >= 0")

        for min_name, max_name, allow_empty in RANGE_FIELDS:
            low = getattr(self, min_name)
            high = getattr(self, max_name)
            if allow_empty and high < low:
                raise ValueError(f"{max_name} must be >= {min_name}")
            if not allow_empty and high <= low:
                raise ValueError(f"{max_name} must be > {min_name}")

        if self.min_rooms < 1:
            raise ValueError("min_rooms must be >= 1")

    def with_overrides(self, **changes: Any) -> "GeneratorSettings":
        updated = replace(self, **{key: value for key, value in changes.items() if value is not None})
        updated.validate()
        return updated

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorSettings":
        if not isinstance(data, dict):
            raise ValueError("settings payload must be an object")
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown settings fields: {unknown}")
        settings = cls(**data)
        settings.validate()
        return settings


def load_settings_json(path: str | Path = DEFAULT_SETTINGS_PATH) -> GeneratorSettings:
    """Load settings from a JSON object, falling back to defaults for absent keys.

    A missing file is not an error: the defaults are returned unchanged.
    """
    settings_path = Path(path)
    if not settings_path.exists():
        return GeneratorSettings()
    try:
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"settings file is not valid JSON: {settings_path}: {exc}") from exc
    return GeneratorSettings.from_dict(payload)
