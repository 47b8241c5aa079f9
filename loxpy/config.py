"""
Runtime configuration for the loxpy pipeline.

One ``InterpreterConfig`` is shared by the parser, the interpreter and the
interactive loop. The CLI builds it from command-line options; library
callers construct it directly or rely on the defaults.
"""

from dataclasses import dataclass

# Each nesting level costs about fourteen Python frames in the parser, so
# the default keeps deeply nested input well inside the recursion limit.
DEFAULT_MAX_NESTING_DEPTH = 48
DEFAULT_MAX_EVAL_DEPTH = 200
DEFAULT_PROMPT = "lox > "


@dataclass
class InterpreterConfig:
    """Settings for parsing, evaluation and the REPL."""
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_eval_depth: int = DEFAULT_MAX_EVAL_DEPTH
    strict_comparisons: bool = False   # raise instead of returning false for non-numbers
    prompt: str = DEFAULT_PROMPT
    poll_interval: float = 0.05        # seconds between REPL quit-flag checks

    def __post_init__(self):
        if self.max_nesting_depth < 1:
            raise ValueError("max_nesting_depth must be at least 1")
        if self.max_eval_depth < 1:
            raise ValueError("max_eval_depth must be at least 1")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
