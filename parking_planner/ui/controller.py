import logging
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Callable, List, Optional, Tuple

from parking_planner.core.service import ReservationService
from parking_planner.models.inventory import Inventory
from parking_planner.models.member import Member, MemberDirectory
from parking_planner.models.reservation import DATE_FMT, TIME_FMT, Reservation, ReservationProposal
from parking_planner.models.store import StorageError

logger = logging.getLogger(__name__)

MINUTE_STEP = 15
TABLE_HEADINGS = ("Correo", "Nombre", "Categoría", "Sótano", "Espacio", "Fecha", "Inicio", "Fin")


class AppState(Enum):
    LOGGED_OUT = "logged_out"
    MAIN_MENU = "main_menu"
    SELECTING_LOT = "selecting_lot"
    SELECTING_SPACE = "selecting_space"
    CONFIRMING_TIME = "confirming_time"
    VIEWING_RESERVATIONS = "viewing_reservations"


class Controller:
    """
    Adaptador entre la UI y el núcleo de reservas.

    Mantiene el estado de navegación de una sesión (AppState) y ofrece métodos
    sencillos que la UI puede llamar:
    - login(email) / logout() -> (ok: bool, mensaje: Optional[str])
    - start_reservation() / select_lot(n) / select_space(code) / back()
    - default_times() / hour_options() / minute_options()
    - summary(start, end) -> texto de confirmación
    - confirm(start, end) -> (ok: bool, mensaje: str)
    - reservation_rows() -> filas para la tabla de administración
    El núcleo no sabe nada de navegación; todo vive aquí.
    """

    def __init__(self, service: ReservationService, members: MemberDirectory, inventory: Inventory,
                 institutional_domain: str = "@utp.edu.pe", clock: Callable[[], datetime] = datetime.now):
        self.service = service
        self.members = members
        self.inventory = inventory
        self.institutional_domain = institutional_domain.lower()
        self.clock = clock

        self.state = AppState.LOGGED_OUT
        self.member: Optional[Member] = None
        self.lot: Optional[int] = None
        self.space_code: Optional[str] = None

    def _reset_selection(self):
        self.lot = None
        self.space_code = None

    def _require(self, *states: AppState):
        if self.state not in states:
            raise RuntimeError(f"Acción no permitida en el estado {self.state.name}")

    # -----------------------
    # Sesión
    # -----------------------
    def login(self, email: str) -> Tuple[bool, Optional[str]]:
        email = (email or "").strip()
        if not email:
            return (False, "Ingrese un correo.")
        if not email.lower().endswith(self.institutional_domain):
            return (False, f"El correo debe ser institucional {self.institutional_domain}")
        member = self.members.resolve(email)
        if member is None:
            return (False, "Correo no registrado en la base.")
        self.member = member
        self._reset_selection()
        self.state = AppState.MAIN_MENU
        logger.info("Ingreso de %s (%s)", member.email, member.role.value)
        return (True, None)

    def logout(self):
        if self.member is not None:
            logger.info("Salida de %s", self.member.email)
        self.member = None
        self._reset_selection()
        self.state = AppState.LOGGED_OUT

    @property
    def can_view_reservations(self) -> bool:
        return self.member is not None and self.member.can_view_reservations

    # -----------------------
    # Navegación
    # -----------------------
    def start_reservation(self):
        self._require(AppState.MAIN_MENU)
        self._reset_selection()
        self.state = AppState.SELECTING_LOT

    def select_lot(self, lot: int):
        self._require(AppState.SELECTING_LOT)
        if not self.inventory.is_valid_lot(lot):
            raise ValueError(f"Sótano inexistente: {lot}")
        self.lot = lot
        self.state = AppState.SELECTING_SPACE

    def select_space(self, code: str):
        self._require(AppState.SELECTING_SPACE, AppState.CONFIRMING_TIME)
        if not self.inventory.is_valid_space(self.lot, code):
            raise ValueError(f"Espacio inexistente: {code}")
        self.space_code = code
        self.state = AppState.CONFIRMING_TIME

    def view_reservations(self):
        self._require(AppState.MAIN_MENU)
        if not self.can_view_reservations:
            raise PermissionError("Solo administradores y docentes pueden ver las reservas.")
        self.state = AppState.VIEWING_RESERVATIONS

    def back(self):
        """Vuelve un paso: el diálogo de horario al mapa, el resto al menú principal."""
        if self.state is AppState.CONFIRMING_TIME:
            self.space_code = None
            self.state = AppState.SELECTING_SPACE
        elif self.state in (AppState.SELECTING_LOT, AppState.SELECTING_SPACE, AppState.VIEWING_RESERVATIONS):
            self._reset_selection()
            self.state = AppState.MAIN_MENU

    def spaces(self) -> List[List[str]]:
        return self.inventory.grid_for(self.lot) if self.lot is not None else []

    # -----------------------
    # Horario
    # -----------------------
    def hour_options(self) -> List[str]:
        return [f"{h:02d}" for h in range(8, 24)]

    def minute_options(self) -> List[str]:
        return [f"{m:02d}" for m in range(0, 60, MINUTE_STEP)]

    def default_times(self, now: Optional[datetime] = None) -> Tuple[time, time]:
        """Inicio sugerido: ahora + 30 min acotado a [08:00, 22:30]; fin: una hora después, máximo 23:00."""
        now = now or self.clock()
        suggested = now + timedelta(minutes=30)
        if suggested.date() != now.date():
            start = time(22, 30)
        else:
            start = min(max(suggested.time().replace(second=0, microsecond=0), time(8, 0)), time(22, 30))
        end = (datetime.combine(now.date(), start) + timedelta(hours=1)).time()
        return (start, min(end, time(23, 0)))

    def _proposal(self, start: time, end: time, day: Optional[date]) -> ReservationProposal:
        if self.member is None or self.lot is None or self.space_code is None:
            raise RuntimeError("No hay un espacio seleccionado")
        day = day or self.clock().date()
        return ReservationProposal.build(self.member.email, self.lot, self.space_code, day, start, end)

    def summary(self, start: time, end: time, day: Optional[date] = None) -> str:
        p = self._proposal(start, end, day)
        return (
            "Resumen de reserva:\n\n"
            f"Nombre: {self.member.display_name}\n"
            f"Categoría: {self.member.role.value}\n"
            f"Sótano: {p.lot}\n"
            f"Espacio: {p.space_code}\n"
            f"Fecha: {p.date.strftime(DATE_FMT)}\n"
            f"Horario: {p.start.strftime(TIME_FMT)} - {p.end.strftime(TIME_FMT)}\n\n"
            "Confirmar?"
        )

    def confirm(self, start: time, end: time, day: Optional[date] = None) -> Tuple[bool, str]:
        """
        Envía la reserva al núcleo. Devuelve (True, mensaje) si quedó guardada;
        (False, motivo) si fue rechazada o si falló el almacenamiento.
        """
        self._require(AppState.CONFIRMING_TIME)
        try:
            proposal = self._proposal(start, end, day)
        except ValueError as exc:
            return (False, f"Error al validar horario: {exc}")

        try:
            ok, result = self.service.submit(proposal, self.member, self.clock())
        except StorageError as exc:
            logger.error("No se pudo guardar la reserva de %s: %s", self.member.email, exc)
            return (False, "Error guardando la reserva; no se guardó, intente de nuevo más tarde.")

        if not ok:
            return (False, result.message)
        self._reset_selection()
        self.state = AppState.MAIN_MENU
        return (True, "Reserva guardada correctamente.")

    # -----------------------
    # Vista de administración
    # -----------------------
    def reservation_rows(self) -> Tuple[List[Tuple[str, ...]], Optional[str]]:
        """Filas para la tabla (mismas columnas que TABLE_HEADINGS) y un mensaje de error si lo hubo."""
        try:
            reservations: List[Reservation] = self.service.list_all()
        except StorageError as exc:
            logger.error("No se pudieron listar las reservas: %s", exc)
            return ([], f"No se pudieron leer las reservas: {exc}")
        return ([tuple(r.to_row()) for r in reservations], None)
