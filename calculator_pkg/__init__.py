"""Calculator package: classification, rewriting, safe evaluation and solvers."""

__all__ = [
    "config",
    "parser",
    "evaluator",
    "classifier",
    "solver",
    "geometry",
    "api",
    "session",
    "history",
    "cli",
    "types",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "calculate",
    "classify",
    "evaluate",
    "validate_expression",
]
