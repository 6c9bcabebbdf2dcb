"""Punto de entrada de la calculadora."""

import logging
import os
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp


WINDOW_GEOMETRY = "360x520"
WINDOW_MIN_SIZE = (320, 480)
LOG_LEVEL = os.environ.get("CALCULADORA_LOG_LEVEL", "WARNING")
LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s │ %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Instala un único handler de consola en el logger raíz."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)


def main():
    setup_logging()
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    CalculatorApp(root, engine=CalculatorEngine())
    root.mainloop()


if __name__ == "__main__":
    main()
