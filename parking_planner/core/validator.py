import logging
from datetime import datetime, time, timedelta
from enum import Enum

from parking_planner.models.inventory import Inventory
from parking_planner.models.member import Member
from parking_planner.models.reservation import Reservation, ReservationProposal

logger = logging.getLogger(__name__)

SUNDAY = 6  # date.weekday()


class RejectionReason(Enum):
    """Motivos de rechazo; terminales, solo se reintenta cambiando la propuesta."""
    SUNDAY_NOT_ALLOWED = "No se permiten reservas los domingos."
    UNKNOWN_SPACE = "El sótano o el espacio indicado no existe."
    OUTSIDE_SERVICE_WINDOW = "Horario inválido. Debe estar entre 08:00 y 23:00."
    END_NOT_AFTER_START = "Horario inválido. El fin debe ser posterior al inicio."
    START_IN_PAST = "No puede reservar un inicio en horario ya pasado."
    INSUFFICIENT_ADVANCE_NOTICE = "El inicio debe comenzar al menos dentro de 30 minutos desde ahora."
    SPACE_TAKEN = "El espacio ya está reservado en ese horario."
    MEMBER_MISMATCH = "La solicitud no corresponde al usuario identificado."

    @property
    def message(self) -> str:
        return self.value


class ReservationValidator:
    """
    Reglas de negocio sobre una propuesta, sin estado y sin acceso a almacenamiento.
    `now` siempre se recibe como parámetro; nunca se lee el reloj del sistema.
    """

    def __init__(self, inventory: Inventory = None, open_time: time = time(8, 0),
                 close_time: time = time(23, 0), min_advance: timedelta = timedelta(minutes=30)):
        self.inventory = inventory or Inventory()
        self.open_time = open_time
        self.close_time = close_time
        self.min_advance = min_advance

    def check(self, proposal: ReservationProposal, now: datetime):
        """Devuelve (True, None) o (False, RejectionReason) aplicando las reglas en orden."""
        if proposal.date.weekday() == SUNDAY:
            return (False, RejectionReason.SUNDAY_NOT_ALLOWED)

        if not self.inventory.is_valid_space(proposal.lot, proposal.space_code):
            return (False, RejectionReason.UNKNOWN_SPACE)

        if proposal.start < self.open_time or proposal.end > self.close_time:
            return (False, RejectionReason.OUTSIDE_SERVICE_WINDOW)
        if not proposal.end > proposal.start:
            return (False, RejectionReason.END_NOT_AFTER_START)

        start_dt = proposal.start_datetime()
        if start_dt < now:
            return (False, RejectionReason.START_IN_PAST)
        if start_dt - now < self.min_advance:
            return (False, RejectionReason.INSUFFICIENT_ADVANCE_NOTICE)

        return (True, None)

    def validate(self, proposal: ReservationProposal, member: Member, now: datetime):
        """
        Devuelve (True, Reservation) con los datos del miembro copiados,
        o (False, RejectionReason).
        """
        ok, reason = self.check(proposal, now)
        if not ok:
            logger.debug("Propuesta rechazada (%s): %r", reason.name, proposal)
            return (False, reason)
        return (True, Reservation.from_proposal(proposal, member))
