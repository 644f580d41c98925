"""gridcalc.calc - Formula parsing, evaluation and dependency tracking."""

from gridcalc.calc._errors import CalcError, is_error
from gridcalc.calc._evaluator import FormulaEvaluator, evaluate, format_number
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._parser import FormulaParser, extract_references, to_postfix, tokenize
from gridcalc.calc._protocol import CalcEngine, CellDelta, RecalcResult

__all__ = [
    "CalcEngine",
    "CalcError",
    "CellDelta",
    "DependencyGraph",
    "FormulaEvaluator",
    "FormulaParser",
    "RecalcResult",
    "evaluate",
    "extract_references",
    "format_number",
    "is_error",
    "to_postfix",
    "tokenize",
]
