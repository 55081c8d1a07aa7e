import random

import pytest

from calculator_engine import CalculatorEngine, MemoryDisplay
from event_dispatcher import dispatch_label
from number_format import ERROR, MATH_ERROR, SENTINELS, parse_display
from operations import BinaryOp, UnaryOp


def press(engine: CalculatorEngine, sequence: str) -> str:
    for label in sequence.split():
        dispatch_label(engine, label)
    return engine.display_text


def snapshot(engine: CalculatorEngine):
    return (
        engine.display_text,
        engine.pending_operand,
        engine.pending_operator,
        engine.start_new_number,
        engine.last_answer,
    )


@pytest.fixture
def engine():
    return CalculatorEngine()


# ── Escenarios de extremo a extremo ──────────────────────────────

@pytest.mark.parametrize("sequence, expected", [
    ("2 + 3 =", "5"),
    ("2 + 3 × 4 =", "20"),
    ("1 ÷ 0 =", "Math Error"),
    ("9 √", "3"),
    ("9 √ x!", "6"),
    ("9 0 sin", "1"),
    ("5 . . 5 =", "5.5"),
    ("7 ± + 3 =", "-4"),
    ("2 x^y 1 0 =", "1024"),
    ("2 x^y 1 0 = Ans", "1024"),
])
def test_scenarios(engine, sequence, expected):
    assert press(engine, sequence) == expected


def test_initial_state(engine):
    assert snapshot(engine) == ("0", 0.0, None, True, 0.0)
    assert engine.angle_mode == "deg"


# ── Entrada de dígitos ───────────────────────────────────────────

def test_digit_replaces_after_start(engine):
    assert press(engine, "0 7") == "07"
    engine.clear()
    assert press(engine, "7") == "7"


def test_dot_starts_with_zero(engine):
    assert press(engine, ". 5") == "0.5"


def test_double_zero(engine):
    assert press(engine, "1 00") == "100"
    engine.clear()
    assert press(engine, "00") == "00"
    assert parse_display(engine.display_text) == 0


def test_single_dot(engine):
    assert press(engine, "1 . 2 . 3") == "1.23"


# ── Operadores binarios ──────────────────────────────────────────

def test_chained_fold_shows_intermediate(engine):
    assert press(engine, "2 + 3 ×") == "5"
    assert engine.pending_operand == 5
    assert engine.pending_operator is BinaryOp.MUL


def test_operator_replacement_without_fold(engine):
    press(engine, "6 + ×")
    assert engine.pending_operand == 6
    assert engine.pending_operator is BinaryOp.MUL
    assert press(engine, "2 =") == "12"


def test_equals_without_operator_is_noop(engine):
    press(engine, "4 2")
    before = snapshot(engine)
    press(engine, "=")
    assert snapshot(engine) == before


def test_equals_records_answer(engine):
    press(engine, "6 × 7 =")
    assert engine.last_answer == 42
    assert engine.pending_operator is None
    assert engine.start_new_number


def test_divide_by_zero_keeps_pending(engine):
    press(engine, "8 ÷ 0 =")
    assert engine.display_text == MATH_ERROR
    assert engine.pending_operator is BinaryOp.DIV
    assert engine.pending_operand == 8
    assert engine.start_new_number
    assert engine.last_answer == 0


def test_fold_divide_by_zero(engine):
    assert press(engine, "8 ÷ 0 +") == MATH_ERROR
    assert engine.pending_operator is BinaryOp.DIV
    assert engine.start_new_number


def test_power_overflow_is_math_error(engine):
    assert press(engine, "1 0 x^y 4 0 0 =") == MATH_ERROR


def test_digit_after_error_starts_fresh(engine):
    press(engine, "1 ÷ 0 =")
    assert press(engine, "4") == "4"


def test_operator_on_error_display(engine):
    engine.display.set_text(ERROR)
    engine.start_new_number = False
    assert press(engine, "+") == ERROR
    assert engine.pending_operator is None
    assert engine.start_new_number


# ── Funciones unarias ────────────────────────────────────────────

def test_unary_domain_error_preserves_state(engine):
    press(engine, "2 + 4 =")
    press(engine, "3 ×")
    press(engine, "0 ln")
    assert engine.display_text == MATH_ERROR
    assert engine.last_answer == 6
    assert engine.pending_operand == 3
    assert engine.pending_operator is BinaryOp.MUL
    assert engine.start_new_number


@pytest.mark.parametrize("sequence", ["0 ln", "0 log", "1 ± √", "0 1/x", "2 1 x!", "2 . 5 x!"])
def test_unary_math_errors(engine, sequence):
    assert press(engine, sequence) == MATH_ERROR


def test_unary_keeps_pending_operator(engine):
    assert press(engine, "2 + 9 √") == "3"
    assert engine.pending_operator is BinaryOp.ADD
    assert press(engine, "=") == "5"


def test_unary_records_answer(engine):
    press(engine, "4 1/x")
    assert engine.display_text == "0.25"
    assert engine.last_answer == 0.25


def test_angle_mode_property(engine):
    engine.angle_mode = "rad"
    assert press(engine, "0 cos") == "1"
    engine.clear()
    assert press(engine, "9 0 sin") != "1"
    with pytest.raises(ValueError):
        engine.angle_mode = "grad"


def test_angle_mode_polled_from_toggle():
    degrees = [True]
    engine = CalculatorEngine(is_degrees=lambda: degrees[0])
    assert press(engine, "9 0 sin") == "1"
    degrees[0] = False
    engine.clear()
    assert engine.angle_mode == "rad"
    assert press(engine, "9 0 sin").startswith("0.893996663600")
    with pytest.raises(AttributeError):
        engine.angle_mode = "deg"


def test_tan_right_angle_degrees(engine):
    assert press(engine, "9 0 tan") == MATH_ERROR


# ── Comandos auxiliares ──────────────────────────────────────────

def test_clear_is_idempotent_initial_state(engine):
    press(engine, "2 + 3 = 4 ×")
    engine.clear()
    first = snapshot(engine)
    engine.clear()
    assert snapshot(engine) == first == snapshot(CalculatorEngine())


def test_mc_clears(engine):
    press(engine, "2 + 3 = MC")
    assert snapshot(engine) == ("0", 0.0, None, True, 0.0)


def test_backspace(engine):
    assert press(engine, "1 2 3 ⌫") == "12"
    assert press(engine, "⌫ ⌫") == "0"
    assert engine.start_new_number


def test_backspace_on_sentinel(engine):
    press(engine, "1 ÷ 0 =")
    assert press(engine, "⌫") == "0"
    assert engine.start_new_number


def test_backspace_leaves_no_bare_sign(engine):
    press(engine, "5 ±")
    assert engine.display_text == "-5"
    assert press(engine, "⌫") == "0"


def test_toggle_sign_twice_restores(engine):
    press(engine, "1 2 . 5")
    press(engine, "± ±")
    assert engine.display_text == "12.5"


def test_toggle_sign_does_not_touch_start_flag(engine):
    press(engine, "1 2 ±")
    assert not engine.start_new_number
    assert press(engine, "3") == "-123"


def test_toggle_sign_zero(engine):
    assert press(engine, "±") == "0"


def test_toggle_sign_on_error(engine):
    engine.display.set_text(MATH_ERROR)
    assert press(engine, "±") == ERROR


def test_recall_ans_starts_new_number(engine):
    press(engine, "2 x^y 1 0 =")
    assert press(engine, "C 5 Ans") == "0"
    press(engine, "3 × 4 =")
    assert press(engine, "Ans") == "12"
    assert engine.start_new_number
    assert press(engine, "7") == "7"


# ── Invariantes tras cada evento ─────────────────────────────────

ALL_LABELS = (
    "MC C ⌫ ÷ sin cos tan × ln log √ − x^y x! 1/x + "
    "7 8 9 = 4 5 6 ± 1 2 3 . 0 00 Ans"
).split()


def _check_invariants(engine):
    text = engine.display_text
    assert text
    assert text.count(".") <= 1
    if text not in SENTINELS:
        parse_display(text)
    else:
        assert engine.start_new_number


def test_invariants_hold_for_random_sequences():
    for seed in range(40):
        rng = random.Random(seed)
        engine = CalculatorEngine(display=MemoryDisplay())
        for _ in range(60):
            dispatch_label(engine, rng.choice(ALL_LABELS))
            _check_invariants(engine)


def test_start_flag_after_committing_events(engine):
    for label in ("C", "+", "=", "√", "Ans"):
        press(engine, "4")
        press(engine, label)
        assert engine.start_new_number, label


def test_press_methods_accept_enums_directly(engine):
    engine.press_digit("3")
    engine.press_binop(BinaryOp.MUL)
    engine.press_digit("3")
    engine.press_equals()
    engine.apply_unary(UnaryOp.SQRT)
    assert engine.display_text == "3"
