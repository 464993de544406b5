"""CLI layer — program lifecycle, console output and the error boundary.

This package is the outermost layer.  It may import from ``core``,
``data`` and ``infra``, but no other layer may import from ``cli``.
"""

from rec_driver.cli.program import LifecycleState, RecommenderProgram

__all__: list[str] = ["LifecycleState", "RecommenderProgram"]
