"""Link resolution for content-delivery batches.

Avoid importing heavy submodules at package import time to prevent side-effects
(like logger configuration) during test collection.
"""

__all__: list[str] = []
