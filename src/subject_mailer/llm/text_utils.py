"""
Text helpers shared by prompt construction and display.
"""

import math


def confidence_percent(confidence: float) -> int:
    """
    Convert a confidence in [0, 1] to a whole percentage.
    
    Halves round up (0.125 -> 13), unlike Python's round(), so the value
    matches what browsers show for Math.round(confidence * 100).
    
    Examples:
        >>> confidence_percent(0.0)
        0
        >>> confidence_percent(0.42)
        42
        >>> confidence_percent(1.0)
        100
    """
    return int(math.floor(confidence * 100 + 0.5))
