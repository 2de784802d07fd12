"""Game engine components.

The tick executor and scheduler are imported from their own modules
(``spacewar.engine.tick_executor``, ``spacewar.engine.scheduler``) since
they depend on the AI package, which in turn uses the combat estimator.
"""

from .map_generator import generate_map

__all__ = [
    "generate_map",
]
