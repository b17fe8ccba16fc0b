"""Exceptions and warnings raised by interval shuffling."""


class ShuffleError(ValueError):
    """Base class for fatal shuffle conditions."""


class InvalidParameterError(ShuffleError):
    """Raised when a shuffle parameter is outside its allowed range."""


class ExhaustedUniverseError(ShuffleError):
    """Raised when no universe interval is wide enough for any query interval."""


class NoEligibleRegionsError(ShuffleError):
    """Raised when every query interval is wider than the widest universe interval."""


class MissingChromosomeCoverageError(ShuffleError):
    """Raised in per-chromosome mode when a query chromosome has no universe."""

    def __init__(self, chrom):
        self.chrom = chrom
        super().__init__(
            f"The universe does not contain regions for {chrom} "
            "but the query regions do."
        )


class ShuffleWarning(UserWarning):
    """Non-fatal shuffle condition: partial filtering or edge shortening."""
