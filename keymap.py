"""Traducción de botones y teclas a eventos del motor."""

from arithmetic import OperatorKind
from calculator_engine import DIGIT_CHARS, Event, EventKind


_SIMPLE_ACTIONS = {
    "sign": Event.toggle_sign(),
    "percent": Event.percent(),
    "equals": Event.equals(),
    "clear": Event.clear(),
    "backspace": Event.backspace(),
}

_KEYSYM_EVENTS = {
    "Return": Event.equals(),
    "KP_Enter": Event.equals(),
    "BackSpace": Event.backspace(),
    "Escape": Event.clear(),
}

_CHAR_EVENTS = {
    "=": Event.equals(),
    "c": Event.clear(),
    "C": Event.clear(),
}


def event_from_action(action: str) -> Event:
    """Convierte la acción de un botón ("digit:7", "op:÷", "equals"...)."""
    if action in _SIMPLE_ACTIONS:
        return _SIMPLE_ACTIONS[action]

    kind, _, arg = action.partition(":")
    if kind == EventKind.DIGIT.value:
        return Event.digit(arg)
    if kind == EventKind.OPERATOR.value:
        return Event.operator(OperatorKind.from_symbol(arg))
    raise ValueError(f"Acción desconocida: {action!r}")


def event_from_key(char: str, keysym: str = "") -> Event | None:
    """Evento para una pulsación de teclado, o None si se ignora."""
    if keysym in _KEYSYM_EVENTS:
        return _KEYSYM_EVENTS[keysym]
    if not char:
        return None
    if char in DIGIT_CHARS:
        return Event.digit(char)
    if char in _CHAR_EVENTS:
        return _CHAR_EVENTS[char]
    try:
        return Event.operator(OperatorKind(char))
    except ValueError:
        return None
