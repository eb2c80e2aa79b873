import logging

import customtkinter

from parking_planner.ui.controller import AppState, Controller
from parking_planner.ui.screens.login_view import LoginView
from parking_planner.ui.screens.main_menu import MainMenuView
from parking_planner.ui.screens.lot_select import LotSelectionView
from parking_planner.ui.screens.space_map import SpaceMapView
from parking_planner.ui.screens.time_select import TimeSelectionView
from parking_planner.ui.screens.reservations_view import ReservationsView

logger = logging.getLogger(__name__)

customtkinter.set_appearance_mode("System")  # Modes: "System" (standard), "Dark", "Light"
customtkinter.set_default_color_theme("blue")

TITLES = {
    AppState.LOGGED_OUT: "Ingreso - Reserva Estacionamiento",
    AppState.MAIN_MENU: "Sistema de Reservas - Bienvenido",
    AppState.SELECTING_LOT: "Seleccionar Sótano",
    AppState.SELECTING_SPACE: "Mapa de espacios",
    AppState.CONFIRMING_TIME: "Seleccionar horario",
    AppState.VIEWING_RESERVATIONS: "Ver reservas realizadas",
}


class App(customtkinter.CTk):
    """
    Ventana única; cada AppState tiene su pantalla. Las pantallas llaman al
    controller y después a `refresh()`, que muestra la pantalla del estado actual.
    """

    def __init__(self, controller: Controller):
        super().__init__()
        self.controller = controller
        self.geometry(f"{900}x{520}")

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self.frames = {
            AppState.LOGGED_OUT: LoginView(self, controller=controller, on_change=self.refresh),
            AppState.MAIN_MENU: MainMenuView(self, controller=controller, on_change=self.refresh),
            AppState.SELECTING_LOT: LotSelectionView(self, controller=controller, on_change=self.refresh),
            AppState.SELECTING_SPACE: SpaceMapView(self, controller=controller, on_change=self.refresh),
            AppState.CONFIRMING_TIME: TimeSelectionView(self, controller=controller, on_change=self.refresh),
            AppState.VIEWING_RESERVATIONS: ReservationsView(self, controller=controller, on_change=self.refresh),
        }
        for f in self.frames.values():
            f.grid(row=0, column=0, sticky="nsew", padx=12, pady=12)
        self.refresh()

    def refresh(self):
        state = self.controller.state
        self.title(TITLES.get(state, "Reserva Estacionamiento"))
        frame = self.frames[state]
        # cada pantalla se reconstruye con los datos actuales antes de mostrarse
        frame.on_show()
        frame.tkraise()
        logger.debug("Pantalla: %s", state.name)
