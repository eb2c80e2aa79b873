import logging
from pathlib import Path

from parking_planner.config import Settings, build_inventory, build_validator, load_settings
from parking_planner.core.service import ReservationService
from parking_planner.logging_config import setup_logging
from parking_planner.models.member import load_roster
from parking_planner.models.store import CsvReservationStore
from parking_planner.ui.controller import Controller

logger = logging.getLogger(__name__)


def build_controller(settings: Settings) -> Controller:
    """Arma el núcleo a partir de la configuración: padrón, inventario, registro y servicio."""
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)

    members = load_roster(settings.roster_file)

    inventory = build_inventory(settings)
    store = CsvReservationStore(settings.reservations_file)
    service = ReservationService(store, build_validator(settings, inventory))
    return Controller(service, members, inventory, institutional_domain=settings.institutional_domain)


def main():
    settings = load_settings()
    setup_logging(settings.log_dir, settings.log_level)
    logger.info("Datos en %s, reservas en %s", settings.data_dir, settings.reservations_file)

    controller = build_controller(settings)

    # la UI se importa aquí para que el núcleo pueda usarse sin entorno gráfico
    from parking_planner.ui.app import App
    app = App(controller)
    app.mainloop()


if __name__ == "__main__":
    main()
