import csv
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Categoría del miembro; el valor es la grafía usada en el padrón."""
    STUDENT = "alumno"
    ADMIN = "admin"
    FACULTY = "docente"

    @classmethod
    def parse(cls, value: str) -> "Role":
        return cls(value.strip().lower())


@dataclass(frozen=True)
class Member:
    """Miembro del padrón institucional. Inmutable una vez cargado."""
    email: str
    display_name: str
    role: Role

    def __post_init__(self):
        if not self.email or not isinstance(self.email, str):
            raise ValueError("El correo del miembro debe ser una cadena no vacía.")
        object.__setattr__(self, "email", normalize_email(self.email))

    @property
    def can_view_reservations(self) -> bool:
        return self.role in (Role.ADMIN, Role.FACULTY)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class MemberDirectory:
    """
    Búsqueda de solo lectura sobre el padrón de miembros.
    Se construye una sola vez al arrancar y se inyecta donde se necesite.
    """

    def __init__(self, members: Iterable[Member] = (), load_error: Optional[str] = None):
        self._members: Dict[str, Member] = {}
        for m in members:
            self._members[m.email] = m
        self.load_error = load_error

    def resolve(self, email) -> Optional[Member]:
        """Devuelve el miembro con ese correo (sin distinguir mayúsculas) o None."""
        if not email:
            return None
        return self._members.get(normalize_email(email))

    def __contains__(self, email):
        return self.resolve(email) is not None

    def __len__(self):
        return len(self._members)

    def __repr__(self):
        return f"<MemberDirectory: {len(self._members)} miembros>"


def load_roster(path: Union[str, Path]) -> MemberDirectory:
    """
    Carga el padrón `correo,nombre,categoria` (primera línea = cabecera).
    Si el archivo falta o no se puede leer, devuelve un directorio vacío con
    `load_error` informado; nunca lanza.
    """
    p = Path(path)
    members = []
    try:
        with p.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)  # cabecera
            for lineno, parts in enumerate(reader, start=2):
                if not parts or not "".join(parts).strip():
                    continue
                if len(parts) < 3:
                    logger.warning("Padrón %s línea %d: se esperaban 3 campos, se ignora", p, lineno)
                    continue
                # el nombre puede contener comas si no viene entrecomillado
                email, name, category = parts[0], ",".join(parts[1:-1]), parts[-1]
                try:
                    members.append(Member(email, name.strip(), Role.parse(category)))
                except ValueError as exc:
                    logger.warning("Padrón %s línea %d ignorada: %s", p, lineno, exc)
    except (OSError, UnicodeDecodeError) as exc:
        message = f"No se pudo leer el padrón {p}: {exc}"
        logger.error(message)
        return MemberDirectory(load_error=message)

    directory = MemberDirectory(members)
    logger.info("Padrón cargado desde %s: %d miembros", p, len(directory))
    return directory
