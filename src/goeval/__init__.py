"""goeval - compile and run fragments of Go code.

Example:
    >>> from goeval import evaluate
    >>> evaluate("println(200*300)").output
    '60000\\n'

"""

from goeval.core.config import EvalConfig
from goeval.evaluator import EvalResult, evaluate

__version__ = "0.1.0"

__all__ = ["EvalConfig", "EvalResult", "evaluate", "__version__"]
