"""
Evaluation API controllers.

- EvaluationsController: evaluations and department monitoring (/api/evaluations/)
"""

from academia.evaluations.api.evaluations import EvaluationsController

__all__ = [
    "EvaluationsController",
]
