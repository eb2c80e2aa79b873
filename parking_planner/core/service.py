import logging
from datetime import datetime
from typing import List

from parking_planner.core.validator import RejectionReason, ReservationValidator
from parking_planner.models.member import Member, normalize_email
from parking_planner.models.reservation import Reservation, ReservationProposal
from parking_planner.models.store import InsertOutcome, ReservationStore

logger = logging.getLogger(__name__)


class ReservationService:
    """
    Punto de entrada de los colaboradores externos (UI, CLI).

    submit(proposal, member, now) -> (True, Reservation) | (False, RejectionReason)
    list_all() -> lista de reservas persistidas

    Sin reintentos: un conflicto o una regla incumplida es el resultado final
    de esa solicitud. Los fallos de E/S (StorageWriteError) se propagan.
    """

    def __init__(self, store: ReservationStore, validator: ReservationValidator = None):
        self.store = store
        self.validator = validator or ReservationValidator()

    def submit(self, proposal: ReservationProposal, member: Member, now: datetime):
        if normalize_email(proposal.member_email) != member.email:
            return (False, RejectionReason.MEMBER_MISMATCH)

        # reglas primero: baratas y sin E/S
        ok, result = self.validator.validate(proposal, member, now)
        if not ok:
            return (False, result)

        if self.store.try_insert(result) is InsertOutcome.CONFLICT:
            return (False, RejectionReason.SPACE_TAKEN)
        return (True, result)

    def list_all(self) -> List[Reservation]:
        return self.store.load_all()
