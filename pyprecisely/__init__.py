"""
PyPrecisely: epidemiologic study size from confidence-interval precision.

Plan a study by the precision of its estimate rather than the power of a
test: how many participants give a risk difference, risk ratio, rate
difference, rate ratio or odds ratio a confidence interval of the desired
width, what precision a fixed study size achieves, and how large a study
must be for its upper limit to rule out a level of concern.

Usage:
    from pyprecisely import precision, mapping
"""

import logging

__version__ = "0.1.0"

from pyprecisely import precision
from pyprecisely import mapping

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "precision",
    "mapping",
]
