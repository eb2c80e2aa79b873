import csv
import io
import logging
import os
import threading
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from parking_planner.models.reservation import FIELDS, MalformedRecordError, Reservation

logger = logging.getLogger(__name__)


class InsertOutcome(Enum):
    ACCEPTED = "accepted"
    CONFLICT = "conflict"


class StorageError(OSError):
    """Fallo de E/S del almacenamiento de reservas."""


class StorageWriteError(StorageError):
    """La reserva no quedó persistida; quien llama debe reintentar más tarde."""


class StorageReadError(StorageError):
    """No se pudo leer el registro de reservas."""


class ReservationStore(ABC):
    """
    Registro de reservas de solo anexado.

    El único mutador es `try_insert`: comprueba conflictos y anexa dentro de la
    misma sección crítica (un lock por instancia), así dos inserciones
    solapadas nunca pueden aceptarse ambas. No hay actualización ni borrado.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @abstractmethod
    def load_all(self) -> List[Reservation]:
        """Lee el registro completo; los registros mal formados se omiten."""

    @abstractmethod
    def _append(self, reservation: Reservation) -> None:
        """Anexa un registro y lo deja persistido antes de volver."""

    def _find_conflict(self, candidate) -> Optional[Reservation]:
        for existing in self.load_all():
            if existing.conflicts_with(candidate):
                return existing
        return None

    def has_conflict(self, candidate) -> bool:
        """True si alguna reserva guardada comparte sótano, espacio y fecha y se solapa."""
        return self._find_conflict(candidate) is not None

    def try_insert(self, reservation: Reservation) -> InsertOutcome:
        """
        Operación atómica de inserción: re-comprueba el conflicto y anexa bajo el lock.
        Devuelve ACCEPTED o CONFLICT; un fallo de escritura lanza StorageWriteError.
        """
        with self._lock:
            existing = self._find_conflict(reservation)
            if existing is not None:
                logger.info("Conflicto: %r choca con %r", reservation, existing)
                return InsertOutcome.CONFLICT
            self._append(reservation)
        logger.info("Reserva guardada: %r", reservation)
        return InsertOutcome.ACCEPTED


class InMemoryReservationStore(ReservationStore):
    """Implementación en memoria, misma semántica que la de archivo."""

    def __init__(self, initial: Iterable[Reservation] = ()):
        super().__init__()
        self._records = list(initial)

    def load_all(self) -> List[Reservation]:
        return list(self._records)

    def _append(self, reservation: Reservation) -> None:
        self._records.append(reservation)

    def __repr__(self):
        return f"<InMemoryReservationStore: {len(self._records)} reservas>"


class CsvReservationStore(ReservationStore):
    """
    Registro en archivo CSV con cabecera:
        correo,nombre,categoria,sotano,codigoEspacio,fecha,inicio,fin
    Cada registro se escribe con una sola escritura y se sincroniza a disco
    (flush + fsync) antes de confirmar. Los lectores no toman el lock: lo que
    sigue al último salto de línea es una escritura en curso y se ignora. Un
    registro ilegible (campos, fechas o bytes no UTF-8) se omite sin cortar la lectura.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self._ensure_file()

    def _ensure_file(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists() or self.path.stat().st_size == 0:
                with self.path.open("w", encoding="utf-8", newline="") as f:
                    f.write(",".join(FIELDS) + "\n")
                logger.info("Creado registro de reservas vacío en %s", self.path)
        except OSError as exc:
            # sin archivo no se podrá guardar; se informará en la primera escritura
            logger.error("No se pudo preparar el registro %s: %s", self.path, exc)

    def load_all(self) -> List[Reservation]:
        try:
            with self.path.open("rb") as f:
                raw = f.read()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageReadError(f"No se pudo leer {self.path}: {exc}") from exc

        # lo que sigue al último salto de línea es una escritura a medias (o vacío)
        cut = raw.rfind(b"\n") + 1
        if raw[cut:]:
            logger.debug("Ignorando fragmento final incompleto en %s", self.path)
        # los bytes inválidos quedan como sustitutos y se detectan por registro
        content = raw[:cut].decode("utf-8", errors="surrogateescape")

        out = []
        reader = csv.reader(io.StringIO(content, newline=""))
        for parts in reader:
            lineno = reader.line_num
            if not parts or not "".join(parts).strip():
                continue
            if lineno == 1 and tuple(p.strip() for p in parts) == FIELDS:
                continue
            try:
                "".join(parts).encode("utf-8")
            except UnicodeEncodeError:
                logger.warning("Registro con bytes no UTF-8 en %s línea %d, se omite", self.path, lineno)
                continue
            try:
                out.append(Reservation.from_row(parts))
            except MalformedRecordError as exc:
                logger.warning("Registro mal formado en %s línea %d, se omite: %s", self.path, lineno, exc)
        return out

    def _append(self, reservation: Reservation) -> None:
        buf = io.StringIO()
        csv.writer(buf, lineterminator="\n").writerow(reservation.to_row())
        line = buf.getvalue()
        try:
            with self.path.open("a", encoding="utf-8", newline="") as f:
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except OSError as exc:
            logger.error("Fallo al guardar %r en %s: %s", reservation, self.path, exc)
            raise StorageWriteError(f"No se pudo guardar la reserva en {self.path}: {exc}") from exc

    def __repr__(self):
        return f"<CsvReservationStore: {self.path}>"
