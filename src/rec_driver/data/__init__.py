"""Data collaborators owned by the driver: ID mappings and attribute matrices.

Rules
-----
* No imports from ``cli`` or ``core``.
* File access only in explicit ``save``/``load`` methods.
"""

from rec_driver.data.entity_mapping import EntityMapping
from rec_driver.data.sparse_boolean_matrix import SparseBooleanMatrix

__all__: list[str] = ["EntityMapping", "SparseBooleanMatrix"]
