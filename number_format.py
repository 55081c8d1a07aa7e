"""
Conversión entre el texto de la pantalla y valores numéricos.

La pantalla es la fuente de verdad del operando actual: cada operación
vuelve a leerla con parse_display() y escribe su resultado con
format_number().
"""

import math
import re
from decimal import Decimal


ERROR = "Error"
MATH_ERROR = "Math Error"
SENTINELS = (ERROR, MATH_ERROR)

# Numeral admitido en pantalla: signo opcional, dígitos y como mucho un
# punto. "12." es válido durante la entrada.
_DISPLAY_RE = re.compile(r"^-?\d+(?:\.\d*)?$")


def parse_display(text: str) -> float:
    """Interpreta el texto de la pantalla como número real finito.

    Raises:
        ValueError: el texto no es un numeral decimal (centinelas de
            error, "-", "inf", "nan", cadena vacía...).
    """
    if not _DISPLAY_RE.fullmatch(text):
        raise ValueError(f"No es un número: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Fuera de rango: {text!r}")
    return value


def format_number(value: float) -> str:
    """Decimal más corto que reproduce el mismo double, sin notación científica.

    repr() ya entrega la representación más corta de ida y vuelta;
    Decimal permite quitar ceros finales y expandir el exponente.

    >>> format_number(1.0), format_number(0.1), format_number(1e21)
    ('1', '0.1', '1000000000000000000000')
    """
    if not math.isfinite(value):
        raise ValueError(f"Valor no finito: {value!r}")
    if value == 0:
        return "0"

    plain = format(Decimal(repr(float(value))).normalize(), "f")
    if "." in plain:
        plain = plain.rstrip("0").rstrip(".")
    return plain


def is_sentinel(text: str) -> bool:
    return text in SENTINELS
