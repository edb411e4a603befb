class DimensionMismatchError(ValueError):
    """Exception raised for inconsistent input shapes."""

    def __init__(self, message="The input dimensions do not match."):
        self.message = message
        super().__init__(self.message)


class NumericalDegeneracyError(ArithmeticError):
    """Exception raised if a candidate column is collinear with the active set."""

    def __init__(self, message="The candidate column is collinear with the active set."):
        self.message = message
        super().__init__(self.message)


class InvariantViolationError(AssertionError):
    """Exception raised if the internal bookkeeping of the path is inconsistent."""

    def __init__(self, message="Internal invariant of the path algorithm violated."):
        self.message = message
        super().__init__(self.message)
