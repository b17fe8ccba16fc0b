"""
PyReMap - randomized genomic interval sets for co-localization enrichment
"""

__version__ = '0.1.0'

from ._shared import (
    CONFIG,
    _make_progress_callback,
    _progress_context,
)
from .errors import (
    ExhaustedUniverseError,
    InvalidParameterError,
    MissingChromosomeCoverageError,
    NoEligibleRegionsError,
    ShuffleError,
    ShuffleWarning,
)
from .intervals import (
    gchrom_sizes,
    gchrom_sizes_load,
    gintervals,
    gintervals_all,
    gintervals_canonic,
    gintervals_from_bed,
    gintervals_universe,
)
from .shuffle import gintervals_shuffle, gintervals_shuffle_n

__all__ = [
    # Configuration
    'CONFIG',

    # Chromosome sizes
    'gchrom_sizes',
    'gchrom_sizes_load',

    # Interval functions
    'gintervals',
    'gintervals_all',
    'gintervals_canonic',
    'gintervals_from_bed',
    'gintervals_universe',

    # Shuffling
    'gintervals_shuffle',
    'gintervals_shuffle_n',

    # Errors and warnings
    'ShuffleError',
    'InvalidParameterError',
    'ExhaustedUniverseError',
    'NoEligibleRegionsError',
    'MissingChromosomeCoverageError',
    'ShuffleWarning',

    # Internal (shared)
    '_make_progress_callback',
    '_progress_context',
]
