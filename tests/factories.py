from __future__ import annotations

from datetime import datetime, timezone

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_row(**overrides: str) -> dict[str, str]:
    """Well-formed, coherent accident row; keyword overrides replace fields."""
    row = {
        "id": "ACC-2024-000001",
        "fecha": "2023-05-01",
        "hora": "14:30",
        "ubicacion": "Av. Central km 12",
        "tipo_vehiculo": "automovil",
        "gravedad": "leve",
        "victimas": "2",
        "condicion_climatica": "soleado",
        "condicion_via": "seco",
        "edad_conductor": "30",
        "alcohol_involucrado": "no",
        "exceso_velocidad": "si",
    }
    row.update(overrides)
    return row
