# rankfome/logger.py
# Configuração de logging da API

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configura o logger raiz do pacote (console). Idempotente."""
    global _configured
    root = logging.getLogger("rankfome")
    root.setLevel(level.upper())
    if _configured:
        return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(console_handler)
    root.propagate = False
    _configured = True
