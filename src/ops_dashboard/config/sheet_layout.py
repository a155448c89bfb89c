"""Column layout of the four spreadsheet tabs feeding the daily report."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SheetLayout:
    name: str
    last_column: str  # spreadsheet column letter, A-based
    columns: tuple[str, ...]

    @property
    def range_name(self) -> str:
        return f"{self.name}!A:{self.last_column}"

    @property
    def width(self) -> int:
        return len(self.columns)


REGISTROS = SheetLayout(
    name="Registros",
    last_column="N",
    columns=(
        "id_registro",
        "fecha",
        "estado_puerto_directemar",
        "estado_puerto_concesion",
        "dia_operacion",
        "num_equipos",
        "num_equipos_inoperativos",
        "num_equipos_bombeando",
        "cliente",
        "centro",
        "responsable",
        "condiciones_clima",
        "detalles",
        "archivos_clima",
    ),
)

DMAS = SheetLayout(
    name="DMAs",
    last_column="O",
    columns=(
        "id_registro",
        "estado_equipo",
        "dma_numero",
        "plataforma",
        "plataforma_estado",
        "central",
        "central_estado",
        "manga",
        "manguera",
        "tobera",
        "tobera_estado",
        "estacion",
        "punto",
        "horas_bombeo",
        "observaciones",
    ),
)

NAVES = SheetLayout(
    name="Naves",
    last_column="C",
    columns=("id_registro", "nave_nombre", "nave_observaciones"),
)

ROVS = SheetLayout(
    name="ROVs",
    last_column="F",
    columns=("id_registro", "rov_numero", "responsable", "estado", "ubicacion", "observaciones"),
)

# Fetch order; Registros first since it anchors the linkage keys
ALL_SHEETS: tuple[SheetLayout, ...] = (REGISTROS, DMAS, NAVES, ROVS)
