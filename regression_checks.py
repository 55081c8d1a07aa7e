from calculator_engine import CalculatorEngine
from event_dispatcher import dispatch, event_for_button
import sys


def _replay(labels: list[str], *, degrees: bool = True):
	engine = CalculatorEngine()
	engine.angle_mode = "deg" if degrees else "rad"
	states = []

	for label in labels:
		dispatch(engine, event_for_button(label))
		states.append((label, engine.display_text))

	return engine, states


def _run(sequence: str, *, degrees: bool = True) -> str:
	engine, _ = _replay(sequence.split(), degrees=degrees)
	return engine.display_text


def inspect_sequence(sequence: str, *, degrees: bool = True) -> None:
	"""Imprime la pantalla y el estado del motor tras cada pulsación."""
	engine, states = _replay(sequence.split(), degrees=degrees)

	print("Sequence inspection")
	print(f"labels:         {sequence}")
	print(f"angle mode:     {'deg' if degrees else 'rad'}")
	print("states:")
	for i, (label, text) in enumerate(states, start=1):
		print(f"  {i}. {label:>4} -> {text}")

	operator = engine.pending_operator.value if engine.pending_operator else "none"
	print(f"pending:        {engine.pending_operand} {operator}")
	print(f"start new:      {engine.start_new_number}")
	print(f"last answer:    {engine.last_answer}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	scenarios = [
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
	]
	for sequence, expected in scenarios:
		expected_actual.append((sequence, expected, _run(sequence)))

	checks.append((
		"radians mode leaves sin(90) unconverted",
		_run("9 0 sin", degrees=False).startswith("0.893996663600"),
	))
	checks.append((
		"tan(90°) reports a math error",
		_run("9 0 tan") == "Math Error",
	))
	checks.append((
		"cos(90°) is exactly zero",
		_run("9 0 cos") == "0",
	))
	checks.append((
		"sin(30°) is exactly one half",
		_run("3 0 sin") == "0.5",
	))
	checks.append((
		"0.1 + 0.2 keeps the shortest round-trip digits",
		_run(". 1 + . 2 =") == "0.30000000000000004",
	))
	checks.append((
		"large results never use scientific notation",
		_run("1 0 x^y 2 1 =") == "1000000000000000000000",
	))
	checks.append((
		"21! exceeds the factorial cap",
		_run("2 1 x!") == "Math Error",
	))
	checks.append((
		"20! is shown in full",
		_run("2 0 x!") == "2432902008176640000",
	))
	checks.append((
		"overflowing power collapses to a math error",
		_run("1 0 x^y 4 0 0 =") == "Math Error",
	))
	checks.append((
		"operator replaced without fold",
		_run("6 + × 2 =") == "12",
	))
	checks.append((
		"unary keeps pending operator",
		_run("2 + 9 √ =") == "5",
	))
	checks.append((
		"MC clears like C",
		_run("4 + 4 = MC") == "0" and _run("4 + 4 = MC Ans") == "0",
	))
	checks.append((
		"backspace on error sentinel restores zero",
		_run("1 ÷ 0 = ⌫") == "0",
	))

	for label, expected, actual in expected_actual:
		checks.append((f"scenario {label}", expected == actual))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "2 + 3 × 4 ="
	#   python regression_checks.py --inspect "9 0 sin" --rad
	if "--inspect" in sys.argv:
		try:
			sequence = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing button sequence after --inspect")

		inspect_sequence(sequence, degrees="--rad" not in sys.argv)
	else:
		run_regressions()
