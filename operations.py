"""Operaciones binarias y unarias de la calculadora en doble precisión."""

import enum
import math

from mpmath import mp


class MathDomainError(ArithmeticError):
    """Operación indefinida: división por cero, dominio o resultado no finito."""


class BinaryOp(enum.Enum):
    ADD = "+"
    SUB = "−"
    MUL = "×"
    DIV = "÷"
    POW = "^"


class UnaryOp(enum.Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    LN = "ln"
    LOG10 = "log10"
    SQRT = "sqrt"
    INV = "inv"
    FACT = "fact"


FACTORIAL_LIMIT = 20           # 20! cabe en un entero de 64 bits con signo
DEGREE_TRIG_PRECISION = 113    # bits de trabajo para la trigonometría en grados


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise MathDomainError(f"{what}: resultado no finito")
    return value


# ── Binarias ─────────────────────────────────────────────────────

def compute_binary(a: float, b: float, op: BinaryOp) -> float:
    """Aplica ``op`` a ``a`` y ``b``.

    Raises:
        MathDomainError: división por cero o resultado NaN/infinito.
    """
    if op is BinaryOp.ADD:
        result = a + b
    elif op is BinaryOp.SUB:
        result = a - b
    elif op is BinaryOp.MUL:
        result = a * b
    elif op is BinaryOp.DIV:
        if b == 0:
            raise MathDomainError("División por cero")
        result = a / b
    elif op is BinaryOp.POW:
        # math.pow sigue IEEE-754 pero lanza excepción donde C devolvería
        # NaN o infinito
        try:
            result = math.pow(a, b)
        except (ValueError, OverflowError) as exc:
            raise MathDomainError(f"{a} ^ {b}: {exc}") from exc
    else:
        raise ValueError(f"Operador desconocido: {op!r}")
    return _finite(result, f"{a} {op.value} {b}")


# ── Trigonometría en grados ──────────────────────────────────────
#  sinpi/cospi trabajan sobre múltiplos exactos de π, así que 30° da
#  exactamente 0.5 y cos(90°) exactamente 0.

def _half_turns(degrees: float):
    return mp.mpf(degrees) / 180


def sin_degrees(degrees: float) -> float:
    with mp.workprec(DEGREE_TRIG_PRECISION):
        return float(mp.sinpi(_half_turns(degrees)))


def cos_degrees(degrees: float) -> float:
    with mp.workprec(DEGREE_TRIG_PRECISION):
        return float(mp.cospi(_half_turns(degrees)))


def tan_degrees(degrees: float) -> float:
    with mp.workprec(DEGREE_TRIG_PRECISION):
        turns = _half_turns(degrees)
        cosine = mp.cospi(turns)
        if cosine == 0:
            raise MathDomainError(f"tan({degrees}°) no está definida")
        return float(mp.sinpi(turns) / cosine)


# ── Unarias ──────────────────────────────────────────────────────

def factorial(n: int) -> int:
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def _check_domain(op: UnaryOp, v: float):
    if op in (UnaryOp.LN, UnaryOp.LOG10) and v <= 0:
        raise MathDomainError(f"{op.value}({v}) requiere un argumento positivo")
    if op is UnaryOp.SQRT and v < 0:
        raise MathDomainError(f"sqrt({v}) requiere un argumento no negativo")
    if op is UnaryOp.INV and v == 0:
        raise MathDomainError("1/0 no está definido")
    if op is UnaryOp.FACT and (v < 0 or v != math.floor(v) or v > FACTORIAL_LIMIT):
        raise MathDomainError(
            f"fact({v}) requiere un entero entre 0 y {FACTORIAL_LIMIT}"
        )


def compute_unary(op: UnaryOp, v: float, degrees: bool = False) -> float:
    """Aplica la función ``op`` a ``v``.

    Con ``degrees`` las funciones trigonométricas interpretan ``v`` en grados.

    Raises:
        MathDomainError: ``v`` fuera del dominio de ``op`` o resultado no finito.
    """
    _check_domain(op, v)

    if op is UnaryOp.SIN:
        result = sin_degrees(v) if degrees else math.sin(v)
    elif op is UnaryOp.COS:
        result = cos_degrees(v) if degrees else math.cos(v)
    elif op is UnaryOp.TAN:
        result = tan_degrees(v) if degrees else math.tan(v)
    elif op is UnaryOp.LN:
        result = math.log(v)
    elif op is UnaryOp.LOG10:
        result = math.log10(v)
    elif op is UnaryOp.SQRT:
        result = math.sqrt(v)
    elif op is UnaryOp.INV:
        result = 1.0 / v
    elif op is UnaryOp.FACT:
        result = float(factorial(int(v)))
    else:
        raise ValueError(f"Función desconocida: {op!r}")
    return _finite(result, f"{op.value}({v})")
