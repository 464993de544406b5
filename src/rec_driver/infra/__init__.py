"""Infrastructure layer — queries against the operating system.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
"""

from rec_driver.infra.memory import memory_usage

__all__: list[str] = ["memory_usage"]
