"""
Interfaz gráfica de la calculadora.

Usa tkinter. La ventana no guarda estado aritmético: cada botón o tecla
se traduce a un Event, se entrega al motor y se pinta el Render devuelto.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import ERROR_TEXT, CalculatorEngine, Event, Render
from keymap import event_from_action, event_from_key


logger = logging.getLogger(__name__)


class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "status_fg":  "#BAC2DE",
        "result_fg":  "#A6E3A1",
        "error_fg":   "#F38BA8",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)
    #  tipo_color: "num", "op", "special", "equals"

    KEYPAD = [
        [("AC", "clear", "special"), ("⌫", "backspace", "special"),
         ("%",  "percent", "special"), ("÷", "op:÷", "op")],

        [("7",  "digit:7", "num"), ("8", "digit:8", "num"),
         ("9",  "digit:9", "num"), ("×", "op:×", "op")],

        [("4",  "digit:4", "num"), ("5", "digit:5", "num"),
         ("6",  "digit:6", "num"), ("−", "op:−", "op")],

        [("1",  "digit:1", "num"), ("2", "digit:2", "num"),
         ("3",  "digit:3", "num"), ("+", "op:+", "op")],

        [("±", "sign", "special"), ("0", "digit:0", "num"),
         (".",  "digit:.", "num"), ("=", "equals", "equals")],

        [("mod", "op:%", "op")],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculatorEngine()

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()
        self._show(self.engine.render)

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_status = tkfont.Font(family="Consolas", size=13)
        self._f_result = tkfont.Font(family="Consolas", size=26, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Línea de estado: expresión en curso, completada o mensaje de error
        self.status_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.status_var, anchor="e",
            font=self._f_status, bg=self.C["display_bg"],
            fg=self.C["status_fg"],
        ).pack(fill="x", pady=(4, 0))

        # Fila del resultado + botón copiar
        row = tk.Frame(frame, bg=self.C["display_bg"])
        row.pack(fill="x", pady=(2, 4))

        self.display_var = tk.StringVar(value="0")
        self.result_entry = tk.Entry(
            row, textvariable=self.display_var, state="readonly",
            font=self._f_result, fg=self.C["result_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0, width=14,
        )

        tk.Button(
            row, text="Copiar", font=self._f_small,
            bg=self.C["special"], fg=self.C["special_fg"],
            activebackground=self.C["num"], relief="flat",
            cursor="hand2", command=self._copy_result, padx=8,
        ).pack(side="right", padx=(6, 0))

        self.result_entry.pack(side="right", fill="x", expand=True)

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            # Repartir columnas con colspan para filas cortas
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda a=action: self._on_action(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    # ── Acciones ─────────────────────────────────────────────────

    def _on_action(self, action: str):
        self._dispatch(event_from_action(action))

    def _on_keypress(self, tk_event):
        event = event_from_key(tk_event.char, tk_event.keysym)
        if event is None:
            return None
        self._dispatch(event)
        return "break"

    def _dispatch(self, event: Event):
        self._show(self.engine.handle(event))

    def _show(self, render: Render):
        self.display_var.set(render.display)
        self.status_var.set(render.status)
        is_error = render.display == ERROR_TEXT
        self.result_entry.config(
            fg=self.C["error_fg"] if is_error else self.C["result_fg"],
        )

    # ── Copiar resultado ─────────────────────────────────────────

    def _copy_result(self):
        text = self.display_var.get()
        self.root.clipboard_clear()
        self.root.clipboard_append(text)
        logger.debug("Copiado al portapapeles: %s", text)
