"""
CanalPluvial - Dimensionamiento de canales de drenaje pluvial.

Método racional con curvas IDF, tiempo de concentración y
dimensionamiento por Manning de canales trapeciales y en U.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
