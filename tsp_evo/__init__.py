"""
Genetic-algorithm search for short closed tours over a fixed 2D point set,
advanced one generation at a time.
"""

__all__ = [
    "controller",
    "data",
    "evaluation",
    "evolutionary",
    "operators",
]
