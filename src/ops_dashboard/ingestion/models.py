"""Typed records for the four report sheets.

Field names follow the spreadsheet headers so that ``to_dict`` output can be
handed to the presentation layer unchanged.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

PUMPING = "Bombeando"
INOPERATIVE = "Inoperativo"
OPERATIONAL = "Operativo"


def _same_state(value: str, expected: str) -> bool:
    return value.strip().lower() == expected.lower()


@dataclass(frozen=True)
class Registro:
    """Daily report record anchoring a report date to an identifier."""

    id_registro: str
    fecha: Optional[datetime]
    estado_puerto_directemar: str = ""
    estado_puerto_concesion: str = ""
    dia_operacion: int = 0
    num_equipos: int = 0
    num_equipos_inoperativos: int = 0
    num_equipos_bombeando: int = 0
    cliente: str = ""
    centro: str = ""
    responsable: str = ""
    condiciones_clima: str = ""
    detalles: str = ""
    archivos_clima: str = ""

    def to_dict(self) -> dict:
        data = asdict(self)
        data["fecha"] = self.fecha.isoformat() if self.fecha else None
        return data


@dataclass(frozen=True)
class DMA:
    """Pump unit status row linked to a Registro."""

    id_registro: str
    estado_equipo: str = ""
    dma_numero: str = ""
    plataforma: str = ""
    plataforma_estado: str = ""
    central: str = ""
    central_estado: str = ""
    manga: str = ""
    manguera: str = ""
    tobera: str = ""
    tobera_estado: str = ""
    estacion: str = ""
    punto: str = ""
    horas_bombeo: float = 0.0
    observaciones: str = ""

    @property
    def is_pumping(self) -> bool:
        return _same_state(self.estado_equipo, PUMPING)

    @property
    def is_inoperative(self) -> bool:
        return _same_state(self.estado_equipo, INOPERATIVE)

    @property
    def is_standby(self) -> bool:
        return not (self.is_pumping or self.is_inoperative)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Nave:
    """Vessel present at the site for the report."""

    id_registro: str
    nave_nombre: str = ""
    nave_observaciones: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ROV:
    """Remote-operated vehicle status row."""

    id_registro: str
    rov_numero: str = ""
    responsable: str = ""
    estado: str = ""
    ubicacion: str = ""
    observaciones: str = ""

    @property
    def is_operational(self) -> bool:
        return _same_state(self.estado, OPERATIONAL)

    def to_dict(self) -> dict:
        return asdict(self)
