"""rec-driver — command-line driver skeleton for recommender programs.

Provides the shared option vocabulary, cross-field validation and
run lifecycle that concrete recommender executables build on.
"""

import logging

from rec_driver.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = ["__version__"]
