"""Configuración de la aplicación.

Un único punto para leer los valores de ejecución: rutas de datos, tamaño de
la grilla de espacios y reglas de reserva. Se leen del entorno (prefijo
``PARKING_``) y, en desarrollo, de un archivo ``.env``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time, timedelta
from pathlib import Path
from typing import Mapping, Optional

from dateutil.parser import isoparser
from dotenv import load_dotenv

from parking_planner.core.validator import ReservationValidator
from parking_planner.models.inventory import Inventory

PREFIX = "PARKING_"


@dataclass(frozen=True)
class Settings:
    """Instantánea inmutable de la configuración."""

    data_dir: Path
    roster_file: Path
    reservations_file: Path
    lots: int
    grid_rows: int
    grid_cols: int
    open_time: time
    close_time: time
    min_advance_minutes: int
    institutional_domain: str
    log_dir: Path
    log_level: str

    @property
    def min_advance(self) -> timedelta:
        return timedelta(minutes=self.min_advance_minutes)


def _get(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(PREFIX + key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _to_int(env: Mapping[str, str], key: str, default: int, minimum: int = 1) -> int:
    raw = _get(env, key, str(default))
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{PREFIX}{key} debe ser un entero, se recibió {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{PREFIX}{key} debe ser >= {minimum}, se recibió {value}")
    return value


def _to_time(env: Mapping[str, str], key: str, default: str) -> time:
    raw = _get(env, key, default)
    try:
        return isoparser().parse_isotime(raw)
    except ValueError as exc:
        raise ValueError(f"{PREFIX}{key} debe tener formato HH:MM, se recibió {raw!r}") from exc


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Carga la configuración del entorno con valores por defecto."""
    if env is None:
        load_dotenv(override=False)
        env = os.environ

    data_dir = Path(_get(env, "DATA_DIR", "data"))
    open_time = _to_time(env, "OPEN_TIME", "08:00")
    close_time = _to_time(env, "CLOSE_TIME", "23:00")
    if not open_time < close_time:
        raise ValueError(f"{PREFIX}OPEN_TIME debe ser anterior a {PREFIX}CLOSE_TIME")

    return Settings(
        data_dir=data_dir,
        roster_file=Path(_get(env, "ROSTER_FILE", str(data_dir / "usuarios.csv"))),
        reservations_file=Path(_get(env, "RESERVATIONS_FILE", str(data_dir / "reservas.csv"))),
        lots=_to_int(env, "LOTS", 3),
        grid_rows=_to_int(env, "GRID_ROWS", 4),
        grid_cols=_to_int(env, "GRID_COLS", 6),
        open_time=open_time,
        close_time=close_time,
        min_advance_minutes=_to_int(env, "MIN_ADVANCE_MINUTES", 30, minimum=0),
        institutional_domain=_get(env, "INSTITUTIONAL_DOMAIN", "@utp.edu.pe").lower(),
        log_dir=Path(_get(env, "LOG_DIR", "logs")),
        log_level=_get(env, "LOG_LEVEL", "INFO").upper(),
    )


def build_inventory(settings: Settings) -> Inventory:
    return Inventory(lots=settings.lots, rows=settings.grid_rows, cols=settings.grid_cols)


def build_validator(settings: Settings, inventory: Inventory) -> ReservationValidator:
    return ReservationValidator(
        inventory,
        open_time=settings.open_time,
        close_time=settings.close_time,
        min_advance=settings.min_advance,
    )
