"""Punto de entrada de la calculadora científica."""

import logging
import tkinter as tk

from calculator_ui import CalculatorApp


START_IN_DEGREES = True
LOG_LEVEL = logging.WARNING
WINDOW_GEOMETRY = "380x600"
WINDOW_MIN_SIZE = (340, 540)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    CalculatorApp(root, start_in_degrees=START_IN_DEGREES)
    root.mainloop()


if __name__ == "__main__":
    main()
