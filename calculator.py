"""
Calculator Engine for PocketCalc
Turns key actions into display state, history and memory updates
"""
import logging
import math
import re
from collections import namedtuple
from datetime import datetime

import config
from evaluator import CONSTANTS, FUNCTIONS, EvalError, ExpressionEvaluator, to_canonical
from history_manager import HistoryLog
from memory_manager import MemoryStore
from number_formatter import is_number

logger = logging.getLogger(__name__)

# Action kinds
DIGIT = "digit"
OPERATOR = "operator"
EVALUATE = "evaluate"
CLEAR = "clear"
BACKSPACE = "backspace"
FUNCTION = "function"
PAREN = "paren"
MEMORY = "memory"
RECALL_HISTORY = "recall_history"
CLEAR_HISTORY = "clear_history"

DIGITS = "0123456789."
OPERATORS = ("+", "-", "×", "÷", "*", "/", "^", "%")
MEMORY_KEYS = ("M+", "M-", "MR", "MC")

Action = namedtuple("Action", ["kind", "value"], defaults=(None,))

DisplayState = namedtuple("DisplayState", ["display", "equation"])

_OPEN_FUNCTION_RE = re.compile(r"(?:%s)$" % "|".join(FUNCTIONS))


def _now_ms():
    return int(datetime.now().timestamp() * 1000)


class CalculatorEngine:
    """State machine behind the calculator keys.

    ``display`` holds the operand being typed (or a result, or "Error") and
    ``equation`` the committed prefix, e.g. ``"7 + "``. Every action returns
    the new DisplayState; evaluation failures never escape, they turn into the
    "Error" display.
    """

    def __init__(self, evaluator=None, history=None, memory=None, clock=_now_ms):
        self.evaluator = evaluator if evaluator is not None else ExpressionEvaluator()
        self.history = history if history is not None else HistoryLog()
        self.memory = memory if memory is not None else MemoryStore()
        self.clock = clock
        self.display = "0"
        self.equation = ""
        self._handlers = {
            DIGIT: self.add_digit,
            OPERATOR: self.add_operator,
            EVALUATE: lambda value: self.evaluate(),
            CLEAR: lambda value: self.clear(),
            BACKSPACE: lambda value: self.backspace(),
            FUNCTION: self.apply_function,
            PAREN: self.add_paren,
            MEMORY: self.memory_action,
            RECALL_HISTORY: self.recall_history_entry,
            CLEAR_HISTORY: lambda value: self.clear_history(),
        }

    def dispatch(self, action):
        """Apply one Action and return the new state"""
        handler = self._handlers.get(action.kind)
        if handler is None:
            logger.warning("Ignoring unknown action kind %r", action.kind)
            return self.state()
        return handler(action.value)

    def state(self):
        return DisplayState(self.display, self.equation)

    def _show_error(self):
        self.display = config.ERROR_TEXT
        self.equation = ""

    def add_digit(self, digit):
        """Add a digit or decimal point to the current operand"""
        if not isinstance(digit, str) or len(digit) != 1 or digit not in DIGITS:
            logger.warning("Ignoring invalid digit %r", digit)
            return self.state()

        fresh = self.display in ("0", config.ERROR_TEXT)
        if digit == ".":
            if fresh:
                self.display = "0."
            elif "." not in self.display and "e" not in self.display:
                self.display += digit
        elif fresh:
            self.display = digit
        else:
            self.display += digit
        return self.state()

    def add_operator(self, operator):
        """Commit the operand and an operator to the equation"""
        if operator not in OPERATORS:
            logger.warning("Ignoring invalid operator %r", operator)
            return self.state()
        if self.display == config.ERROR_TEXT:
            return self.state()
        self.equation += f"{self.display} {operator} "
        self.display = "0"
        return self.state()

    def evaluate(self):
        """Evaluate equation + display, recording successful results"""
        expression = self.equation + self.display
        try:
            result = self.evaluator.evaluate(expression)
        except EvalError as e:
            logger.debug("Evaluation of %r failed: %s", expression, e)
            self._show_error()
            return self.state()

        self.history.record(expression, result, self.clock())
        self.display = result
        self.equation = ""
        return self.state()

    def clear(self):
        """All clear"""
        self.display = "0"
        self.equation = ""
        return self.state()

    def backspace(self):
        """Drop the last character of the operand"""
        if len(self.display) <= 1 or self.display == config.ERROR_TEXT:
            self.display = "0"
        else:
            # a bare sign or exponent marker is not a number on its own
            self.display = self.display[:-1].rstrip("eE+-") or "0"
        return self.state()

    def _current_value(self):
        if not is_number(self.display):
            return None
        return float(self.display)

    def apply_function(self, name):
        """Scientific keys: x², xʸ, constants and the unary functions"""
        if not isinstance(name, str):
            logger.warning("Ignoring invalid function %r", name)
        elif name == "pow2":
            current = self._current_value()
            if current is None:
                self._show_error()
                return self.state()
            squared = current * current
            if math.isfinite(squared):
                self.display = to_canonical(squared)
            else:
                self._show_error()
        elif name == "powY":
            return self.add_operator("^")
        elif name in CONSTANTS:
            self.display = to_canonical(CONSTANTS[name])
        elif name in FUNCTIONS:
            self.equation += f"{name}("
            self.display = "0"
        else:
            logger.warning("Ignoring unknown function %r", name)
        return self.state()

    def add_paren(self, paren):
        """Open a group, or close the innermost open one into the operand"""
        if paren == "(":
            self.equation += "("
            self.display = "0"
            return self.state()
        if paren != ")":
            logger.warning("Ignoring invalid parenthesis %r", paren)
            return self.state()

        start = self.equation.rfind("(")
        if start < 0:
            return self.state()
        opener = _OPEN_FUNCTION_RE.search(self.equation, 0, start)
        if opener is not None:
            start = opener.start()

        group = f"{self.equation[start:]}{self.display})"
        try:
            result = self.evaluator.evaluate(group)
        except EvalError as e:
            logger.debug("Evaluation of group %r failed: %s", group, e)
            self._show_error()
            return self.state()
        self.equation = self.equation[:start]
        self.display = result
        return self.state()

    def memory_action(self, key):
        """Memory keys: M+, M-, MR, MC"""
        if key not in MEMORY_KEYS:
            logger.warning("Ignoring unknown memory key %r", key)
        elif key == "MR":
            recalled = self.memory.recall()
            if math.isfinite(recalled):
                self.display = to_canonical(recalled)
            else:
                self._show_error()
        elif key == "MC":
            self.memory.clear()
        else:
            current = self._current_value()
            if current is None:
                return self.state()
            if key == "M+":
                self.memory.add(current)
            else:
                self.memory.subtract(current)
        return self.state()

    def recall_history_entry(self, entry):
        """Show a past result, provided the entry is still in the log"""
        if entry in self.history.entries():
            self.display = entry.result
        return self.state()

    def clear_history(self):
        self.history.clear()
        return self.state()

    def get_memory(self):
        return self.memory.recall()

    def get_history(self):
        return self.history.entries()

    def export_state(self):
        """Plain-data snapshot for a storage collaborator"""
        return {
            "display": self.display,
            "equation": self.equation,
            "memory": self.memory.recall(),
            "history": self.history.to_list(),
        }

    def import_state(self, snapshot):
        """Restore a snapshot produced by export_state"""
        display = snapshot.get("display", "0")
        if display != config.ERROR_TEXT and not is_number(display):
            logger.warning("Discarding invalid saved display %r", display)
            display = "0"
        self.display = display
        self.equation = str(snapshot.get("equation") or "")

        try:
            self.memory.restore(snapshot.get("memory", 0))
        except (TypeError, ValueError):
            logger.warning("Discarding invalid saved memory %r", snapshot.get("memory"))
            self.memory.clear()
        if not math.isfinite(self.memory.recall()):
            self.memory.clear()

        self.history.load(snapshot.get("history") or [])
        return self.state()
