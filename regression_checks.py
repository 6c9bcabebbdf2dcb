from calculator_engine import CalculatorEngine, Render
from keymap import event_from_key
import sys


def _press(keys: str) -> tuple[CalculatorEngine, list[Render]]:
	"""Teclea `keys` como si fuera el teclado; "s" = ±, "p" = %, "=" = igual."""
	engine = CalculatorEngine()
	renders = []
	for key in keys:
		if key == "s":
			render = engine.toggle_sign()
		elif key == "p":
			render = engine.percent()
		else:
			event = event_from_key(key)
			if event is None:
				raise SystemExit(f"Tecla sin evento: {key!r}")
			render = engine.handle(event)
		renders.append(render)
	return engine, renders


def inspect_keys(keys: str) -> None:
	"""Imprime el Render tras cada pulsación."""
	_, renders = _press(keys)

	print("Key inspection")
	print(f"keys:           {keys}")
	for key, render in zip(keys, renders):
		print(f"  {key!r:>5} -> display={render.display!r:<16} status={render.status!r}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	_, renders = _press("5+3=")
	expected_actual.append(("5+3= display", "8", renders[-1].display))
	expected_actual.append(("5+3= status", "5 + 3 =", renders[-1].status))

	engine, renders = _press("7/0=")
	expected_actual.append(("7/0= display", "Error", renders[-1].display))
	expected_actual.append(("7/0= status", "Division by zero", renders[-1].status))
	checks.append(("7/0= leaves engine cleared", engine.state.is_cleared))
	checks.append(("digit after error starts fresh", engine.press_digit("1").display == "1"))

	_, renders = _press("9+-2=")
	checks.append(("second operator only replaces pending operator", renders[2].status == "9 -"))
	expected_actual.append(("9+-2=", "7", renders[-1].display))

	_, renders = _press("5ss")
	expected_actual.append(("5 ±", "-5", renders[1].display))
	expected_actual.append(("5 ± ±", "5", renders[2].display))

	_, renders = _press("20p")
	expected_actual.append(("20%", "0.2", renders[-1].display))

	_, renders = _press("00")
	checks.append(("00 collapses to 0", renders[-1].display == "0"))
	_, renders = _press("007")
	checks.append(("leading zero replaced by next digit", renders[-1].display == "7"))

	_, renders = _press("1.2.3")
	expected_actual.append(("second dot ignored", "1.23", renders[-1].display))
	_, renders = _press(".5")
	expected_actual.append(("leading dot seeds zero", "0.5", renders[-1].display))

	_, renders = _press("0.1+0.2=")
	expected_actual.append(("0.1+0.2 rounded to 12 digits", "0.3", renders[-1].display))

	_, renders = _press("2+3*4=")
	expected_actual.append(("chained evaluation left to right", "20", renders[-1].display))
	checks.append(("chained status shows intermediate", renders[4].status == "5 *"))

	_, renders = _press("5*=")
	expected_actual.append(("repeated operand on bare equals", "25", renders[-1].display))
	expected_actual.append(("repeated operand status", "5 * 5 =", renders[-1].status))

	_, renders = _press("7%0=")
	expected_actual.append(("modulo by zero", "Division by zero", renders[-1].status))
	_, renders = _press("7s%3=")
	expected_actual.append(("modulo keeps dividend sign", "-1", renders[-1].display))

	engine, renders = _press("+")
	checks.append(("operator on empty state ignored", engine.state.is_cleared))
	engine, renders = _press("=")
	checks.append(("equals without operator ignored", renders[-1].display == "0"))

	failed = [name for name, ok in checks if not ok]
	failed += [label for label, expected, actual in expected_actual if expected != actual]
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
	#   python regression_checks.py --inspect "12+7s=p"
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")
		inspect_keys(keys)
	else:
		run_regressions()
