"""Record parsers: map raw sheet rows onto typed records by column position."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from ops_dashboard.config.sheet_layout import DMAS, NAVES, REGISTROS, ROVS, SheetLayout
from ops_dashboard.ingestion.models import DMA, ROV, Nave, Registro
from ops_dashboard.ingestion.validators import to_date, to_number, to_text

RawRows = Sequence[Sequence[object]]
T = TypeVar("T")


def _cells(row: Sequence[object], layout: SheetLayout) -> dict[str, object]:
    """Name the cells of a row, padding short rows with None."""
    values = list(row[: layout.width])
    values.extend([None] * (layout.width - len(values)))
    return dict(zip(layout.columns, values))


def _data_rows(values: RawRows | None) -> RawRows:
    # First row is the header
    if not values or len(values) < 2:
        return []
    return values[1:]


def _count(cell: object) -> int:
    return int(to_number(cell))


def parse_registro_row(row: Sequence[object], dayfirst: bool = False) -> Registro:
    c = _cells(row, REGISTROS)
    return Registro(
        id_registro=to_text(c["id_registro"]),
        fecha=to_date(c["fecha"], dayfirst=dayfirst),
        estado_puerto_directemar=to_text(c["estado_puerto_directemar"]),
        estado_puerto_concesion=to_text(c["estado_puerto_concesion"]),
        dia_operacion=_count(c["dia_operacion"]),
        num_equipos=_count(c["num_equipos"]),
        num_equipos_inoperativos=_count(c["num_equipos_inoperativos"]),
        num_equipos_bombeando=_count(c["num_equipos_bombeando"]),
        cliente=to_text(c["cliente"]),
        centro=to_text(c["centro"]),
        responsable=to_text(c["responsable"]),
        condiciones_clima=to_text(c["condiciones_clima"]),
        detalles=to_text(c["detalles"]),
        archivos_clima=to_text(c["archivos_clima"]),
    )


def parse_dma_row(row: Sequence[object]) -> DMA:
    c = _cells(row, DMAS)
    return DMA(
        id_registro=to_text(c["id_registro"]),
        estado_equipo=to_text(c["estado_equipo"]),
        dma_numero=to_text(c["dma_numero"]),
        plataforma=to_text(c["plataforma"]),
        plataforma_estado=to_text(c["plataforma_estado"]),
        central=to_text(c["central"]),
        central_estado=to_text(c["central_estado"]),
        manga=to_text(c["manga"]),
        manguera=to_text(c["manguera"]),
        tobera=to_text(c["tobera"]),
        tobera_estado=to_text(c["tobera_estado"]),
        estacion=to_text(c["estacion"]),
        punto=to_text(c["punto"]),
        horas_bombeo=max(0.0, to_number(c["horas_bombeo"])),
        observaciones=to_text(c["observaciones"]),
    )


def parse_nave_row(row: Sequence[object]) -> Nave:
    c = _cells(row, NAVES)
    return Nave(
        id_registro=to_text(c["id_registro"]),
        nave_nombre=to_text(c["nave_nombre"]),
        nave_observaciones=to_text(c["nave_observaciones"]),
    )


def parse_rov_row(row: Sequence[object]) -> ROV:
    c = _cells(row, ROVS)
    return ROV(
        id_registro=to_text(c["id_registro"]),
        rov_numero=to_text(c["rov_numero"]),
        responsable=to_text(c["responsable"]),
        estado=to_text(c["estado"]),
        ubicacion=to_text(c["ubicacion"]),
        observaciones=to_text(c["observaciones"]),
    )


def _parse_rows(values: RawRows | None, parse_row: Callable[[Sequence[object]], T]) -> list[T]:
    return [parse_row(row or []) for row in _data_rows(values)]


def parse_registros(values: RawRows | None, dayfirst: bool = False) -> list[Registro]:
    """Parse the Registros range (header row included)."""
    return _parse_rows(values, lambda row: parse_registro_row(row, dayfirst=dayfirst))


def parse_dmas(values: RawRows | None) -> list[DMA]:
    """Parse the DMAs range (header row included)."""
    return _parse_rows(values, parse_dma_row)


def parse_naves(values: RawRows | None) -> list[Nave]:
    """Parse the Naves range (header row included)."""
    return _parse_rows(values, parse_nave_row)


def parse_rovs(values: RawRows | None) -> list[ROV]:
    """Parse the ROVs range (header row included)."""
    return _parse_rows(values, parse_rov_row)
