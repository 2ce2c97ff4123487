from __future__ import annotations

from typing import Any

SUPPORTED_SCHEMA_VERSIONS = {1}
WORLD_TABLES = ("towns", "buildings", "rooms", "npcs", "containers")
ID_FIELD_BY_TABLE = {
    "towns": "town_id",
    "buildings": "building_id",
    "rooms": "room_id",
    "npcs": "npc_id",
    "containers": "container_id",
}


def _validate_schema_version(payload: dict[str, Any]) -> None:
    schema_version = payload.get("schema_version")
    if not isinstance(schema_version, int):
        raise ValueError("payload must contain integer field: schema_version")
    if schema_version not in SUPPORTED_SCHEMA_VERSIONS:
        raise ValueError(f"unsupported schema_version: {schema_version}")


def validate_world_payload(payload: dict[str, Any]) -> None:
    if not isinstance(payload, dict):
        raise ValueError("world payload must be an object")
    _validate_schema_version(payload)
    if not isinstance(payload.get("world_hash"), str):
        raise ValueError("world payload must contain string field: world_hash")

    for table_name in WORLD_TABLES:
        table = payload.get(table_name)
        if not isinstance(table, dict):
            raise ValueError(f"world payload must contain object field: {table_name}")
        id_field = ID_FIELD_BY_TABLE[table_name]
        for key, row in table.items():
            if not isinstance(row, dict):
                raise ValueError(f"{table_name}[{key}] must be an object")
            if str(row.get(id_field)) != key:
                raise ValueError(f"{table_name} key/id mismatch for '{key}'")


def validate_towns_payload(payload: dict[str, Any]) -> None:
    if not isinstance(payload, dict):
        raise ValueError("towns payload must be an object")
    _validate_schema_version(payload)
    towns = payload.get("towns")
    if not isinstance(towns, list):
        raise ValueError("towns payload must contain list field: towns")
    for index, row in enumerate(towns):
        if not isinstance(row, dict):
            raise ValueError(f"towns[{index}] must be an object")
        if not isinstance(row.get("name"), str):
            raise ValueError(f"towns[{index}].name must be a string")
