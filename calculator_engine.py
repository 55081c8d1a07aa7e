"""
Motor de estado de la calculadora científica.

Este módulo provee la clase CalculatorEngine, que traduce pulsaciones de
dígitos, operadores y funciones en texto de pantalla y resultados. La
evaluación es de izquierda a derecha, sin precedencia: 2 + 3 × 4 = 20.

Contrato con los colaboradores:
    - display: objeto con set_text(str) y get_text() -> str
    - is_degrees: callable sin argumentos -> bool (opcional)

El operando actual es siempre el texto de la pantalla, que se vuelve a
leer en cada operación; no hay copia numérica paralela.
"""

import logging

from number_format import (
    ERROR,
    MATH_ERROR,
    format_number,
    is_sentinel,
    parse_display,
)
from operations import (
    BinaryOp,
    MathDomainError,
    UnaryOp,
    compute_binary,
    compute_unary,
)


logger = logging.getLogger(__name__)


class MemoryDisplay:
    """Canal de pantalla en memoria, para uso sin interfaz gráfica."""

    def __init__(self, text: str = "0"):
        self._text = text

    def set_text(self, text: str):
        self._text = text

    def get_text(self) -> str:
        return self._text


class CalculatorEngine:
    """Acumulador de dos registros con operador pendiente."""

    def __init__(self, display=None, is_degrees=None):
        self.display = display if display is not None else MemoryDisplay()
        self._is_degrees = is_degrees
        self._angle_mode = "deg"

        self.pending_operand = 0.0
        self.pending_operator: BinaryOp | None = None
        self.start_new_number = True
        self.last_answer = 0.0
        self.display.set_text("0")

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        if self._is_degrees is not None:
            return "deg" if self._is_degrees() else "rad"
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        if self._is_degrees is not None:
            raise AttributeError("El modo angular lo controla el selector externo")
        self._angle_mode = mode

    @property
    def display_text(self) -> str:
        return self.display.get_text()

    # ── Pantalla ─────────────────────────────────────────────────

    def _show(self, text: str):
        self.display.set_text(text)

    def _show_error(self, sentinel: str, cause):
        logger.info("%s: %s", sentinel, cause)
        self._show(sentinel)
        self.start_new_number = True

    def _read_display(self) -> float | None:
        """Lee la pantalla; si no es un número muestra "Error" y devuelve None."""
        try:
            return parse_display(self.display_text)
        except ValueError as exc:
            self._show_error(ERROR, exc)
            return None

    # ── Entrada de dígitos ───────────────────────────────────────

    def press_digit(self, digit: str):
        """Añade "0".."9", "00" o "." a la pantalla."""
        if self.start_new_number:
            self._show("0." if digit == "." else digit)
            self.start_new_number = False
            return

        current = self.display_text
        if digit == "." and "." in current:
            return
        self._show(current + digit)

    # ── Operadores binarios ──────────────────────────────────────

    def press_binop(self, op: BinaryOp):
        cur = self._read_display()
        if cur is None:
            return

        if self.pending_operator is not None and not self.start_new_number:
            # Encadenado: se pliega la operación pendiente
            try:
                folded = compute_binary(self.pending_operand, cur, self.pending_operator)
            except MathDomainError as exc:
                self._show_error(MATH_ERROR, exc)
                return
            self.pending_operand = folded
            self._show(format_number(folded))
        else:
            self.pending_operand = cur

        self.pending_operator = op
        self.start_new_number = True

    def press_equals(self):
        if self.pending_operator is None:
            return

        b = self._read_display()
        if b is None:
            return
        try:
            result = compute_binary(self.pending_operand, b, self.pending_operator)
        except MathDomainError as exc:
            self._show_error(MATH_ERROR, exc)
            return

        self._show(format_number(result))
        self.last_answer = result
        self.pending_operator = None
        self.start_new_number = True

    # ── Funciones unarias ────────────────────────────────────────

    def apply_unary(self, op: UnaryOp):
        """Aplica ``op`` al valor en pantalla sin tocar el operador pendiente."""
        v = self._read_display()
        if v is None:
            return
        try:
            result = compute_unary(op, v, degrees=self.angle_mode == "deg")
        except MathDomainError as exc:
            self._show_error(MATH_ERROR, exc)
            return

        self._show(format_number(result))
        self.last_answer = result
        self.start_new_number = True

    # ── Comandos auxiliares ──────────────────────────────────────

    def clear(self):
        self._show("0")
        self.pending_operand = 0.0
        self.pending_operator = None
        self.start_new_number = True
        self.last_answer = 0.0

    def backspace(self):
        current = self.display_text
        remaining = current[:-1]
        # Un signo suelto no es un número
        if remaining in ("", "-") or is_sentinel(current):
            self._show("0")
            self.start_new_number = True
            return
        self._show(remaining)

    def toggle_sign(self):
        v = self._read_display()
        if v is None:
            return
        self._show(format_number(-v))

    def recall_ans(self):
        self._show(format_number(self.last_answer))
        self.start_new_number = True
