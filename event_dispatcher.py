"""
Traducción de botones y teclas a eventos, y de eventos a llamadas del motor.

El dispatcher no guarda estado: cada evento se convierte en una única
llamada a CalculatorEngine.
"""

import enum
import logging
from dataclasses import dataclass

from operations import BinaryOp, UnaryOp


logger = logging.getLogger(__name__)


class EventKind(enum.Enum):
    DIGIT = "digit"          # arg: "0".."9", "00" o "."
    BINOP = "binop"          # arg: BinaryOp
    UNARY = "unary"          # arg: UnaryOp
    EQUALS = "equals"
    CLEAR = "clear"
    BACKSPACE = "backspace"
    TOGGLE_SIGN = "toggle_sign"
    RECALL_ANS = "recall_ans"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    arg: object = None


def digit(d: str) -> Event:
    return Event(EventKind.DIGIT, d)


def binop(op: BinaryOp) -> Event:
    return Event(EventKind.BINOP, op)


def unary(op: UnaryOp) -> Event:
    return Event(EventKind.UNARY, op)


EQUALS = Event(EventKind.EQUALS)
CLEAR = Event(EventKind.CLEAR)
BACKSPACE = Event(EventKind.BACKSPACE)
TOGGLE_SIGN = Event(EventKind.TOGGLE_SIGN)
RECALL_ANS = Event(EventKind.RECALL_ANS)


# ── Etiquetas de los botones ─────────────────────────────────────

BUTTON_EVENTS = {
    "MC": CLEAR,
    "C": CLEAR,
    "\u232B": BACKSPACE,             # ⌫
    "÷": binop(BinaryOp.DIV),
    "×": binop(BinaryOp.MUL),
    "−": binop(BinaryOp.SUB),
    "+": binop(BinaryOp.ADD),
    "x^y": binop(BinaryOp.POW),
    "sin": unary(UnaryOp.SIN),
    "cos": unary(UnaryOp.COS),
    "tan": unary(UnaryOp.TAN),
    "ln": unary(UnaryOp.LN),
    "log": unary(UnaryOp.LOG10),
    "\u221A": unary(UnaryOp.SQRT),   # √
    "x!": unary(UnaryOp.FACT),
    "1/x": unary(UnaryOp.INV),
    "=": EQUALS,
    "\u00B1": TOGGLE_SIGN,           # ±
    "Ans": RECALL_ANS,
    ".": digit("."),
    "00": digit("00"),
}
BUTTON_EVENTS.update({str(d): digit(str(d)) for d in range(10)})


# ── Atajos de teclado ────────────────────────────────────────────
#  Caracteres tecleados y, aparte, nombres de tecla (keysym) de Tk.

KEY_CHAR_EVENTS = {
    "+": binop(BinaryOp.ADD),
    "-": binop(BinaryOp.SUB),
    "*": binop(BinaryOp.MUL),
    "/": binop(BinaryOp.DIV),
    "^": binop(BinaryOp.POW),
    "=": EQUALS,
    "\r": EQUALS,
    "\n": EQUALS,
    "\b": BACKSPACE,
    ".": digit("."),
}
KEY_CHAR_EVENTS.update({str(d): digit(str(d)) for d in range(10)})

KEYSYM_EVENTS = {
    "Return": EQUALS,
    "KP_Enter": EQUALS,
    "BackSpace": BACKSPACE,
    "Escape": CLEAR,
}


def event_for_button(label: str) -> Event | None:
    """Evento asociado a una etiqueta de botón; None para el hueco vacío."""
    return BUTTON_EVENTS.get(label.strip())


def event_for_key(char: str, keysym: str = "") -> Event | None:
    if keysym in KEYSYM_EVENTS:
        return KEYSYM_EVENTS[keysym]
    return KEY_CHAR_EVENTS.get(char)


def dispatch(engine, event: Event | None):
    """Entrega ``event`` al motor. Los eventos desconocidos se ignoran."""
    if event is None:
        logger.debug("Evento ignorado")
        return

    logger.debug("Evento %s %s", event.kind.value, event.arg if event.arg is not None else "")
    kind = event.kind
    if kind is EventKind.DIGIT:
        engine.press_digit(event.arg)
    elif kind is EventKind.BINOP:
        engine.press_binop(event.arg)
    elif kind is EventKind.UNARY:
        engine.apply_unary(event.arg)
    elif kind is EventKind.EQUALS:
        engine.press_equals()
    elif kind is EventKind.CLEAR:
        engine.clear()
    elif kind is EventKind.BACKSPACE:
        engine.backspace()
    elif kind is EventKind.TOGGLE_SIGN:
        engine.toggle_sign()
    elif kind is EventKind.RECALL_ANS:
        engine.recall_ans()
    else:
        logger.debug("Evento sin manejador: %r", event)


def dispatch_label(engine, label: str):
    dispatch(engine, event_for_button(label))
