"""
Interfaz gráfica de la calculadora científica.

Usa tkinter. Cada botón o tecla se convierte en un evento que se entrega
al motor en el hilo de la interfaz; ningún manejador bloquea.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine
from event_dispatcher import dispatch, event_for_button, event_for_key
from number_format import is_sentinel


logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  Widget: pantalla de una línea
# ═════════════════════════════════════════════════════════════════

class ResultDisplay:
    """Entry de solo lectura que actúa como canal de pantalla del motor."""

    VISIBLE_CHARS = 17       # caracteres visibles; el resto se desplaza

    def __init__(self, parent, **kw):
        self._var = tk.StringVar(value="0")
        kw.setdefault("width", self.VISIBLE_CHARS + 1)
        self._entry = tk.Entry(parent, textvariable=self._var,
                               state="readonly", **kw)

    @property
    def widget(self):
        return self._entry

    # ── Texto ────────────────────────────────────────────────────

    def set_text(self, text: str):
        self._var.set(text)
        # Mantener visible el último dígito introducido
        self._entry.after(10, self._scroll_to_end)

    def get_text(self) -> str:
        return self._var.get()

    def _scroll_to_end(self):
        self._entry.icursor("end")
        self._entry.xview_moveto(1.0)


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora científica."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "result_fg":  "#A6E3A1",
        "error_fg":   "#F38BA8",
    }

    # ── Rejilla de botones (8×4) ─────────────────────────────────
    #  Cada celda es (texto, tipo_color). La última celda es un hueco.

    BUTTONS = [
        [("MC", "special"), ("C", "special"), ("⌫", "special"), ("÷", "op")],
        [("sin", "func"), ("cos", "func"), ("tan", "func"), ("×", "op")],
        [("ln", "func"), ("log", "func"), ("√", "func"), ("−", "op")],
        [("x^y", "func"), ("x!", "func"), ("1/x", "func"), ("+", "op")],
        [("7", "num"), ("8", "num"), ("9", "num"), ("=", "equals")],
        [("4", "num"), ("5", "num"), ("6", "num"), ("±", "func")],
        [("1", "num"), ("2", "num"), ("3", "num"), (".", "num")],
        [("0", "num"), ("00", "num"), ("Ans", "special"), (" ", None)],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, start_in_degrees: bool = True):
        self.root = root
        self.root.title("Calculadora Científica")
        self.root.configure(bg=self.C["bg"])

        self.degrees_var = tk.BooleanVar(value=start_in_degrees)

        self._init_fonts()
        self._create_display()
        self._create_angle_toggle()
        self._create_buttons()
        self._bind_keyboard()

        self.engine = CalculatorEngine(
            display=self.result_display,
            is_degrees=self.degrees_var.get,
        )

        # Foco inicial en la ventana para recibir el teclado
        self.root.focus_set()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_result = tkfont.Font(family="Consolas", size=26, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=16)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.result_display = ResultDisplay(
            frame,
            font=self._f_result, bg=self.C["display_bg"],
            fg=self.C["result_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0,
        )
        self.result_display.widget.pack(fill="x", pady=(4, 4))

    # ── Selector de grados ───────────────────────────────────────

    def _create_angle_toggle(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.degrees_check = tk.Checkbutton(
            frame, text="Degrees", variable=self.degrees_var,
            font=self._f_small, bg=self.C["bg"], fg=self.C["func_fg"],
            selectcolor=self.C["func"], activebackground=self.C["bg"],
            activeforeground=self.C["func_fg"], relief="flat",
            command=self._on_angle_toggle,
        )
        self.degrees_check.pack(side="left")

    def _on_angle_toggle(self):
        logger.debug("Modo angular: %s", "deg" if self.degrees_var.get() else "rad")
        self.root.focus_set()

    # ── Botones ──────────────────────────────────────────────────

    def _create_buttons(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        cols = len(self.BUTTONS[0])
        for c in range(cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.BUTTONS):
            for c, (text, kind) in enumerate(row_def):
                if kind is None:
                    tk.Label(frame, bg=self.C["bg"]).grid(row=r, column=c)
                    continue
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda t=text: self._on_button(t),
                )
                btn.grid(row=r, column=c, sticky="nsew", padx=2, pady=2,
                         ipady=6)

        for r in range(len(self.BUTTONS)):
            frame.rowconfigure(r, weight=1)

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    # ── Acciones ─────────────────────────────────────────────────

    def _on_button(self, label: str):
        dispatch(self.engine, event_for_button(label))
        self._refresh_display_color()
        # Devolver el foco para que el teclado siga funcionando
        self.root.focus_set()

    def _on_keypress(self, event):
        dispatch(self.engine, event_for_key(event.char, event.keysym))
        self._refresh_display_color()

    def _refresh_display_color(self):
        error = is_sentinel(self.result_display.get_text())
        self.result_display.widget.config(
            fg=self.C["error_fg"] if error else self.C["result_fg"]
        )
