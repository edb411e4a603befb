from .lars import LarsRegression, LassoLars

__all__ = [
    "LarsRegression",
    "LassoLars",
]
