"""Operaciones binarias y formato numérico de la calculadora.

Contrato de interfaz:
    - compute(a: str, b: str, op: OperatorKind) -> EvalResult
    - format_number(value: float) -> str
"""

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


logger = logging.getLogger(__name__)

SIGNIFICANT_DIGITS = 12


# ── Tipos ────────────────────────────────────────────────────────

class OperatorKind(str, Enum):
    """Operadores binarios del teclado."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"

    @classmethod
    def from_symbol(cls, symbol: str) -> "OperatorKind":
        symbol = _GLYPHS.get(symbol, symbol)
        try:
            return cls(symbol)
        except ValueError as exc:
            raise ValueError(f"Operador desconocido: {symbol!r}") from exc

    def __str__(self) -> str:
        return self.value


_GLYPHS = {"×": "*", "÷": "/", "−": "-"}


class ArithmeticErrorKind(Enum):
    INVALID_NUMBER = "Invalid number"
    DIVISION_BY_ZERO = "Division by zero"
    UNSUPPORTED_OPERATOR = "Unsupported operator"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class EvalResult:
    """Resultado de una evaluación: texto formateado o tipo de error."""

    text: str | None = None
    error: ArithmeticErrorKind | None = None

    @classmethod
    def success(cls, text: str) -> "EvalResult":
        return cls(text=text)

    @classmethod
    def failure(cls, kind: ArithmeticErrorKind) -> "EvalResult":
        return cls(error=kind)

    @property
    def ok(self) -> bool:
        return self.error is None


# ── Parseo de operandos ──────────────────────────────────────────

_OPERAND_RE = re.compile(
    r"^-?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?$|^-?Infinity$"
)


def parse_operand(text: str) -> float:
    """Convierte un operando textual en float.

    Solo acepta literales numéricos simples y las formas textuales que
    produce format_number para infinito. "NaN" no es un operando válido.

    Raises:
        ValueError: el texto no es un número válido.
    """
    if text is None or not _OPERAND_RE.match(text):
        raise ValueError(f"Número inválido: {text!r}")
    if text.endswith("Infinity"):
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


# ── Formato ──────────────────────────────────────────────────────

def format_number(value: float, significant_digits: int = SIGNIFICANT_DIGITS) -> str:
    """Redondea a `significant_digits` cifras y quita ceros sobrantes.

    Si el valor redondeado necesitaría notación científica se usa la
    representación mínima del número, aunque muestre más cifras.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    _, exp_text = format(value, f".{significant_digits - 1}e").split("e")
    exponent = int(exp_text)
    if exponent < -6 or exponent >= significant_digits:
        return _shortest_text(value)

    text = format(value, f".{significant_digits - 1 - exponent}f")
    return _strip_fraction(text)


def _shortest_text(value: float) -> str:
    """Representación mínima que vuelve al mismo float."""
    if 1e-6 <= abs(value) < 1e21:
        return _strip_fraction(format(Decimal(repr(value)), "f"))

    mantissa, exp_text = repr(value).split("e")
    exponent = int(exp_text)
    sign = "+" if exponent >= 0 else "-"
    return f"{_strip_fraction(mantissa)}e{sign}{abs(exponent)}"


def _strip_fraction(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


# ── Evaluación ───────────────────────────────────────────────────

def _fmod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        # fmod(inf, x) no está definido
        return math.nan


_OPERATIONS = {
    OperatorKind.ADD: lambda a, b: a + b,
    OperatorKind.SUBTRACT: lambda a, b: a - b,
    OperatorKind.MULTIPLY: lambda a, b: a * b,
    OperatorKind.DIVIDE: lambda a, b: a / b,
    OperatorKind.MODULO: _fmod,
}

_ZERO_SENSITIVE = (OperatorKind.DIVIDE, OperatorKind.MODULO)


def _apply(a: float, b: float, op) -> float:
    try:
        operation = _OPERATIONS[op]
    except (KeyError, TypeError) as exc:
        raise LookupError(f"Operador no soportado: {op!r}") from exc

    if op in _ZERO_SENSITIVE and b == 0:
        raise ZeroDivisionError("división por cero")
    return operation(a, b)


def compute(a: str, b: str, op: OperatorKind) -> EvalResult:
    """Evalúa `a op b` y devuelve el resultado formateado.

    Nunca lanza excepciones: los fallos se devuelven como EvalResult.
    """
    try:
        left = parse_operand(a)
        right = parse_operand(b)
    except ValueError as exc:
        logger.debug("Operando inválido: %s", exc)
        return EvalResult.failure(ArithmeticErrorKind.INVALID_NUMBER)

    try:
        value = _apply(left, right, op)
    except ZeroDivisionError:
        return EvalResult.failure(ArithmeticErrorKind.DIVISION_BY_ZERO)
    except LookupError as exc:
        logger.debug("%s", exc)
        return EvalResult.failure(ArithmeticErrorKind.UNSUPPORTED_OPERATOR)

    return EvalResult.success(format_number(value))
