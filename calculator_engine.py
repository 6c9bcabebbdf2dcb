"""
Motor de la calculadora de cuatro operaciones.

Este módulo provee la clase CalculatorEngine, una máquina de estados que
recibe eventos del teclado (dígitos, operadores, =, %, ±, AC, ⌫) y
devuelve qué debe mostrar la interfaz. No depende de ningún toolkit
gráfico, así que puede probarse sin ventana.

Contrato de interfaz:
    - handle(event: Event) -> Render
    - render: último Render producido
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from arithmetic import (
    ArithmeticErrorKind,
    EvalResult,
    OperatorKind,
    compute,
    format_number,
    parse_operand,
)


logger = logging.getLogger(__name__)

DIGIT_CHARS = frozenset("0123456789.")
ERROR_TEXT = "Error"


# ── Estado ───────────────────────────────────────────────────────

@dataclass
class EngineState:
    """Operandos y operador pendiente de la sesión."""

    current_input: str = ""
    stored_operand: str | None = None
    pending_operator: OperatorKind | None = None

    def clear(self) -> None:
        self.current_input = ""
        self.stored_operand = None
        self.pending_operator = None

    @property
    def is_cleared(self) -> bool:
        return (
            not self.current_input
            and self.stored_operand is None
            and self.pending_operator is None
        )


@dataclass(frozen=True)
class Render:
    """Texto para la pantalla principal y para la línea de estado."""

    display: str = "0"
    status: str = ""


# ── Eventos ──────────────────────────────────────────────────────

class EventKind(Enum):
    DIGIT = "digit"
    TOGGLE_SIGN = "sign"
    PERCENT = "percent"
    OPERATOR = "op"
    EQUALS = "equals"
    CLEAR = "clear"
    BACKSPACE = "backspace"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    payload: str | OperatorKind | None = None

    def __post_init__(self):
        if self.kind is EventKind.DIGIT:
            if not isinstance(self.payload, str) or self.payload not in DIGIT_CHARS:
                raise ValueError(f"Dígito inválido: {self.payload!r}")
        elif self.kind is EventKind.OPERATOR:
            if not isinstance(self.payload, OperatorKind):
                raise ValueError(f"Operador inválido: {self.payload!r}")
        elif self.payload is not None:
            raise ValueError(f"{self.kind.name} no admite argumento")

    @classmethod
    def digit(cls, ch: str) -> "Event":
        return cls(EventKind.DIGIT, ch)

    @classmethod
    def operator(cls, op) -> "Event":
        if isinstance(op, str) and not isinstance(op, OperatorKind):
            op = OperatorKind.from_symbol(op)
        return cls(EventKind.OPERATOR, op)

    @classmethod
    def toggle_sign(cls) -> "Event":
        return cls(EventKind.TOGGLE_SIGN)

    @classmethod
    def percent(cls) -> "Event":
        return cls(EventKind.PERCENT)

    @classmethod
    def equals(cls) -> "Event":
        return cls(EventKind.EQUALS)

    @classmethod
    def clear(cls) -> "Event":
        return cls(EventKind.CLEAR)

    @classmethod
    def backspace(cls) -> "Event":
        return cls(EventKind.BACKSPACE)


# ── Motor ────────────────────────────────────────────────────────

class CalculatorEngine:
    """Acumulador de una calculadora de bolsillo.

    Los operadores se encadenan de izquierda a derecha sin precedencia:
    pulsar un operador con dos operandos disponibles evalúa el anterior.
    Cualquier error aritmético deja el motor como tras AC.
    """

    def __init__(self, state: EngineState | None = None):
        self.state = state if state is not None else EngineState()
        self._display = self._resting_display()
        self._status = ""
        self._handlers = {
            EventKind.DIGIT: self.press_digit,
            EventKind.OPERATOR: self.press_operator,
            EventKind.TOGGLE_SIGN: self.toggle_sign,
            EventKind.PERCENT: self.percent,
            EventKind.EQUALS: self.equals,
            EventKind.CLEAR: self.clear,
            EventKind.BACKSPACE: self.backspace,
        }

    @property
    def render(self) -> Render:
        return Render(self._display, self._status)

    def handle(self, event: Event) -> Render:
        logger.debug("Evento %s %r", event.kind.name, event.payload)
        handler = self._handlers[event.kind]
        if event.payload is None:
            return handler()
        return handler(event.payload)

    def feed(self, events: Iterable[Event]) -> Render:
        """Aplica una secuencia de eventos y devuelve el último Render."""
        for event in events:
            self.handle(event)
        return self.render

    # ── Entrada de dígitos ───────────────────────────────────────

    def press_digit(self, ch: str) -> Render:
        state = self.state
        if ch == ".":
            if "." in state.current_input:
                return self.render
            if not state.current_input:
                state.current_input = "0"

        if state.current_input == "0" and ch != ".":
            state.current_input = ch
        else:
            state.current_input += ch
        self._display = state.current_input
        return self.render

    def backspace(self) -> Render:
        state = self.state
        if state.current_input:
            state.current_input = state.current_input[:-1]
            self._display = state.current_input or "0"
        else:
            state.pending_operator = None
            self._status = ""
        return self.render

    def toggle_sign(self) -> Render:
        state = self.state
        if state.current_input:
            state.current_input = _negate(state.current_input)
            self._display = state.current_input
        elif state.stored_operand is not None:
            state.stored_operand = _negate(state.stored_operand)
            self._display = state.stored_operand
        else:
            state.current_input = "-0"
            self._display = state.current_input
        return self.render

    def percent(self) -> Render:
        state = self.state
        # Con ambos operandos presentes solo se transforma la entrada actual
        if state.current_input:
            try:
                state.current_input = _hundredth(state.current_input)
            except ValueError:
                return self._fail(ArithmeticErrorKind.INVALID_NUMBER)
            self._display = state.current_input
        elif state.stored_operand is not None:
            try:
                state.stored_operand = _hundredth(state.stored_operand)
            except ValueError:
                return self._fail(ArithmeticErrorKind.INVALID_NUMBER)
            self._display = state.stored_operand
            self._status = ""
        return self.render

    # ── Operadores ───────────────────────────────────────────────

    def press_operator(self, op: OperatorKind) -> Render:
        state = self.state
        has_stored = state.stored_operand is not None
        has_input = bool(state.current_input)

        if not has_stored and not has_input:
            return self.render

        if not has_stored:
            state.stored_operand = state.current_input
            state.current_input = ""
        elif has_input:
            result = compute(
                state.stored_operand,
                state.current_input,
                state.pending_operator or op,
            )
            if not result.ok:
                return self._fail(result.error)
            state.stored_operand = result.text
            state.current_input = ""
        # Con operando guardado y sin entrada solo se cambia el operador

        state.pending_operator = op
        self._display = state.stored_operand
        self._status = f"{state.stored_operand} {op}"
        return self.render

    def equals(self) -> Render:
        state = self.state
        if state.pending_operator is None:
            if state.current_input:
                self._display = state.current_input
            elif state.stored_operand is not None:
                self._display = state.stored_operand
            return self.render

        left = state.stored_operand if state.stored_operand is not None else "0"
        right = state.current_input or left
        op = state.pending_operator
        result: EvalResult = compute(left, right, op)
        if not result.ok:
            return self._fail(result.error)

        state.stored_operand = result.text
        state.current_input = ""
        state.pending_operator = None
        self._display = result.text
        self._status = f"{left} {op} {right} ="
        return self.render

    def clear(self) -> Render:
        self.state.clear()
        self._display = self._resting_display()
        self._status = ""
        return self.render

    # ── Errores ──────────────────────────────────────────────────

    def _fail(self, kind: ArithmeticErrorKind) -> Render:
        logger.info("Error aritmético: %s", kind.message)
        self.state.clear()
        self._display = ERROR_TEXT
        self._status = kind.message
        return self.render

    def _resting_display(self) -> str:
        state = self.state
        if state.current_input:
            return state.current_input
        if state.stored_operand is not None:
            return state.stored_operand
        return "0"


def _negate(text: str) -> str:
    return text[1:] if text.startswith("-") else "-" + text


def _hundredth(text: str) -> str:
    return format_number(parse_operand(text) / 100)
