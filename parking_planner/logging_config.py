"""Configuración de logging de la aplicación."""

import logging
import logging.handlers
from pathlib import Path
from typing import Union

MAIN_LOG_FILE = "parking.log"
ERROR_LOG_FILE = "parking_errors.log"


def setup_logging(log_dir: Union[str, Path] = "logs", level: Union[str, int] = "INFO") -> None:
    """
    Consola + archivo rotativo con todo el detalle + archivo solo de errores.
    Reemplaza los handlers previos del logger raíz, así que puede llamarse más de una vez.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    main_handler = logging.handlers.RotatingFileHandler(
        log_dir / MAIN_LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    main_handler.setLevel(level)
    main_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(main_handler)

    error_handler = logging.handlers.RotatingFileHandler(
        log_dir / ERROR_LOG_FILE, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_handler)

    logging.getLogger(__name__).debug("Logging inicializado en %s (nivel %s)", log_dir, logging.getLevelName(level))
