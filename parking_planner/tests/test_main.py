import logging

from parking_planner.config import load_settings
from parking_planner.main import build_controller
from parking_planner.ui.controller import AppState


def test_missing_roster_is_reported_once(tmp_path, caplog):
    settings = load_settings({"PARKING_DATA_DIR": str(tmp_path / "data")})
    with caplog.at_level(logging.ERROR):
        controller = build_controller(settings)

    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert "usuarios.csv" in errors[0].getMessage()
    assert controller.members.load_error
    assert controller.login("ana@utp.edu.pe") == (False, "Correo no registrado en la base.")
    assert controller.state is AppState.LOGGED_OUT


def test_build_controller_creates_reservation_log(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "usuarios.csv").write_text("correo,nombre,categoria\nana@utp.edu.pe,Ana Torres,alumno\n",
                                       encoding="utf-8")
    controller = build_controller(load_settings({"PARKING_DATA_DIR": str(data)}))
    assert (data / "reservas.csv").read_text(encoding="utf-8").startswith("correo,nombre,categoria,")
    assert controller.login("ana@utp.edu.pe") == (True, None)
