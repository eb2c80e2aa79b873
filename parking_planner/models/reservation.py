from dataclasses import dataclass
from datetime import date, datetime, time
from typing import List, Sequence

from dateutil.parser import isoparser, parse

from parking_planner.models.member import Member, Role, normalize_email

DATE_FMT = "%Y-%m-%d"
TIME_FMT = "%H:%M"

# cabecera del registro persistido
FIELDS = ("correo", "nombre", "categoria", "sotano", "codigoEspacio", "fecha", "inicio", "fin")

_iso = isoparser()


class MalformedRecordError(ValueError):
    """Una línea del registro de reservas no se puede interpretar."""


def intervals_overlap(a_start, a_end, b_start, b_end) -> bool:
    """Solapamiento de intervalos semiabiertos [inicio, fin): tocarse no es conflicto."""
    return a_start < b_end and b_start < a_end


def parse_time(value) -> time:
    """Acepta time, datetime o texto ('9:00', '09:00', '21:30')."""
    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)
    if isinstance(value, time):
        return value
    return parse(str(value)).time().replace(second=0, microsecond=0)


def parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return _iso.parse_isodate(str(value).strip())


@dataclass(frozen=True)
class ReservationProposal:
    """Solicitud transitoria construida por quien llama; nunca se persiste tal cual."""
    member_email: str
    lot: int
    space_code: str
    date: date
    start: time
    end: time

    @classmethod
    def build(cls, member_email, lot, space_code, day, start, end) -> "ReservationProposal":
        """Construye la propuesta normalizando fecha y horas desde texto si hace falta."""
        return cls(
            member_email=normalize_email(member_email),
            lot=int(lot),
            space_code=str(space_code).strip().upper(),
            date=parse_date(day),
            start=parse_time(start),
            end=parse_time(end),
        )

    def start_datetime(self) -> datetime:
        return datetime.combine(self.date, self.start)


@dataclass(frozen=True)
class Reservation:
    """
    Reserva aceptada. Inmutable; su identidad es la tupla completa.
    Solo ReservationService la crea, a partir de una propuesta válida.
    """
    member_email: str
    member_name: str
    member_role: Role
    lot: int
    space_code: str
    date: date
    start: time
    end: time

    def __post_init__(self):
        if not self.start < self.end:
            raise ValueError("La hora de fin debe ser posterior a la de inicio.")

    def __repr__(self):
        return (f"<Reservation {self.member_email} sótano {self.lot} {self.space_code} "
                f"{self.date.strftime(DATE_FMT)} {self.start.strftime(TIME_FMT)}-{self.end.strftime(TIME_FMT)}>")

    @classmethod
    def from_proposal(cls, proposal: ReservationProposal, member: Member) -> "Reservation":
        return cls(
            member_email=member.email,
            member_name=member.display_name,
            member_role=member.role,
            lot=proposal.lot,
            space_code=proposal.space_code,
            date=proposal.date,
            start=proposal.start,
            end=proposal.end,
        )

    # ----------------------------
    # Conflictos
    # ----------------------------
    def same_space(self, other) -> bool:
        return (self.lot, self.space_code, self.date) == (other.lot, other.space_code, other.date)

    def conflicts_with(self, other) -> bool:
        """Mismo sótano, espacio y fecha con horarios solapados. Simétrica."""
        return self.same_space(other) and intervals_overlap(self.start, self.end, other.start, other.end)

    # ----------------------------
    # Registro persistido
    # ----------------------------
    def to_row(self) -> List[str]:
        return [
            self.member_email,
            self.member_name,
            self.member_role.value,
            str(self.lot),
            self.space_code,
            self.date.strftime(DATE_FMT),
            self.start.strftime(TIME_FMT),
            self.end.strftime(TIME_FMT),
        ]

    @classmethod
    def from_row(cls, parts: Sequence[str]) -> "Reservation":
        """Reconstruye una reserva desde los campos del registro; MalformedRecordError si no es válida."""
        if len(parts) != len(FIELDS):
            raise MalformedRecordError(f"se esperaban {len(FIELDS)} campos, llegaron {len(parts)}")
        email, name, category, lot, code, day, start, end = (p.strip() for p in parts)
        try:
            return cls(
                member_email=normalize_email(email),
                member_name=name,
                member_role=Role.parse(category),
                lot=int(lot),
                space_code=code,
                date=_iso.parse_isodate(day),
                start=_iso.parse_isotime(start),
                end=_iso.parse_isotime(end),
            )
        except ValueError as exc:
            raise MalformedRecordError(str(exc)) from exc
