class TaxComputationError(Exception):
    """Base error raised by the tax engine."""


class InvalidTurnoverError(TaxComputationError, ValueError):
    """Annual turnover is negative and cannot be mapped to a CIT band."""

    def __init__(self, turnover):
        self.turnover = turnover
        super().__init__(
            f"Annual turnover cannot be negative (got {turnover})"
        )
