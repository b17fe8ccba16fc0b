"""Random repositioning of genomic intervals within a universe (shuffling)."""

import logging as _logging

from ._shared import (
    CONFIG,
    _as_generator,
    _empty_intervals,
    _numpy,
    _pandas,
    _progress_context,
    _warn,
)
from .errors import (
    ExhaustedUniverseError,
    InvalidParameterError,
    MissingChromosomeCoverageError,
    NoEligibleRegionsError,
)
from .intervals import _check_intervals, gchrom_sizes, gintervals_universe

_logger = _logging.getLogger(__name__)

_DIAGNOSTIC_KEYS = ('dropped_universe', 'dropped_query', 'shortened')


def _new_diagnostics():
    return dict.fromkeys(_DIAGNOSTIC_KEYS, 0)


def _check_included(included):
    try:
        value = float(included)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"The parameter included should be a number between 0 and 1, got {included!r}."
        ) from e
    # NaN fails both comparisons
    if not 0.0 <= value <= 1.0:
        raise InvalidParameterError(
            f"The parameter included should be comprised between 0 and 1, got {included!r}."
        )
    return value


def _widths(intervals):
    return (intervals['end'] - intervals['start']).to_numpy(dtype=_numpy.int64)


def _validate_regions(query, universe, included, diagnostics):
    """Drop universe and query intervals that cannot be paired.

    Returns the surviving query (input order kept) and the surviving
    universe sorted by decreasing width.
    """
    universe_widths = _widths(universe)
    order = _numpy.argsort(-universe_widths, kind='stable')
    universe = universe.iloc[order]
    universe_widths = universe_widths[order]

    if len(universe) == 0:
        raise ExhaustedUniverseError("The universe does not contain any region.")

    adjusted = _widths(query) * included

    keep = universe_widths >= adjusted.min()
    n_dropped = int(len(universe) - keep.sum())
    if n_dropped > 0:
        if n_dropped == len(universe):
            raise ExhaustedUniverseError(
                "All universe regions are shorter than the shortest query region."
            )
        _warn(f"{n_dropped} universe regions are shorter than the shortest "
              "query region and will be ignored.")
        universe = universe[keep]
        diagnostics['dropped_universe'] += n_dropped

    # widest remaining universe interval is first; compared on the full width
    keep = _widths(query) <= universe_widths[0]
    n_dropped = int(len(query) - keep.sum())
    if n_dropped > 0:
        if n_dropped == len(query):
            raise NoEligibleRegionsError(
                "All query regions are longer than the longest universe region."
            )
        _warn(f"{n_dropped} query regions are longer than the longest "
              "universe region and will be ignored.")
        query = query[keep]
        diagnostics['dropped_query'] += n_dropped

    return query, universe


def _sample_hosts(adjusted_widths, universe_widths, rng):
    """Pick a hosting universe interval for every adjusted query width.

    *universe_widths* must be sorted in decreasing order. Only intervals at
    least as wide as the query are eligible, and among those the choice is
    proportional to interval width.
    """
    cum_widths = _numpy.cumsum(universe_widths)
    # number of leading (widest) universe intervals wide enough for each query
    n_eligible = _numpy.searchsorted(-universe_widths, -adjusted_widths, side='right')
    totals = cum_widths[n_eligible - 1]
    draws = rng.integers(0, totals)
    return _numpy.searchsorted(cum_widths, draws, side='right')


def _resolve_placements(query_widths, included, host_starts, host_widths,
                        chrom_lengths, rng):
    """Turn sampled hosts into final coordinates clamped to the chromosomes.

    Returns ``(starts, ends, n_shortened)``.
    """
    adjusted = query_widths * included
    min_starts = -(query_widths * (1 - included))
    max_starts = host_widths - adjusted

    random_values = rng.random(len(query_widths))
    offsets = _numpy.round(random_values * (min_starts + max_starts) - min_starts)
    starts = host_starts + offsets.astype(_numpy.int64)
    starts[starts < 0] = 0
    ends = starts + _numpy.round(adjusted).astype(_numpy.int64)

    # slide intervals that run past the chromosome end back inside
    over = ends > chrom_lengths
    starts[over] -= ends[over] - chrom_lengths[over]
    ends[over] = chrom_lengths[over]

    short = starts < 0
    n_shortened = int(short.sum())
    if n_shortened > 0:
        _warn(f"{n_shortened} query regions are longer than the chromosome "
              "they fell in. They will be shortened.")
        starts[short] = 0

    return starts, ends, n_shortened


def _shuffle_universe(query, universe, chrom_sizes, included, rng, diagnostics):
    """Shuffle *query* into *universe* without regard to chromosomes."""
    if len(query) == 0:
        return _empty_intervals()

    query, universe = _validate_regions(query, universe, included, diagnostics)

    query_widths = _widths(query).astype(float)
    universe_widths = _widths(universe)
    hosts = _sample_hosts(query_widths * included, universe_widths, rng)

    host_chroms = universe['chrom'].to_numpy()[hosts]
    host_starts = universe['start'].to_numpy(dtype=_numpy.int64)[hosts]
    chrom_lengths = chrom_sizes.reindex(host_chroms).to_numpy(dtype=_numpy.int64)

    starts, ends, n_shortened = _resolve_placements(
        query_widths, included, host_starts, universe_widths[hosts],
        chrom_lengths, rng,
    )
    diagnostics['shortened'] += n_shortened

    return _pandas.DataFrame({
        'chrom': host_chroms,
        'start': starts,
        'end': ends,
        'strand': universe['strand'].to_numpy(dtype=_numpy.int64)[hosts],
    }, index=query.index)


def _shuffle_by_chrom(query, chrom_sizes, universe, included, rng, diagnostics):
    """Shuffle each chromosome's query intervals within that chromosome only."""
    unknown = sorted(set(query['chrom']) - set(chrom_sizes.index))
    if unknown:
        raise ValueError(
            f"Query regions on chromosomes missing from chrom_sizes: {', '.join(unknown)}"
        )

    results = []
    for chrom in chrom_sizes.index:
        query_chrom = query[query['chrom'] == chrom]
        if len(query_chrom) == 0:
            continue
        universe_chrom = universe[universe['chrom'] == chrom]
        if len(universe_chrom) == 0:
            raise MissingChromosomeCoverageError(chrom)
        _logger.debug("shuffling %d regions on %s (%d universe regions)",
                      len(query_chrom), chrom, len(universe_chrom))
        results.append(_shuffle_universe(
            query_chrom, universe_chrom, chrom_sizes, included, rng, diagnostics
        ))

    if not results:
        return _empty_intervals()
    return _pandas.concat(results)


def gintervals_shuffle(query, chrom_sizes, universe=None, included=1.0,
                       by_chrom=False, rng=None):
    """
    Shuffle genomic intervals within a universe.

    Every query interval is moved to a random position inside the
    universe. The hosting universe interval is drawn among those wide
    enough to hold the query, with probability proportional to its width,
    and the position inside it is uniform. Placed intervals never cross
    the chromosome edges: intervals running past the end of a chromosome
    are slid back inside it, and intervals longer than their chromosome
    are shortened to the full chromosome (with a warning).

    Parameters
    ----------
    query : DataFrame
        Intervals to shuffle (chrom, start, end[, strand]).
    chrom_sizes : dict, Series or DataFrame
        Chromosome-size table (see :func:`gchrom_sizes`).
    universe : DataFrame, optional
        Allowed placement intervals. Overlapping and touching intervals are
        merged. Defaults to the whole genome described by *chrom_sizes*.
    included : float, default 1.0
        Fraction of each query width that must lie within the universe
        interval hosting it. Shuffled intervals have width
        ``round(width * included)``; the remaining ``width * (1 - included)``
        is an overhang budget that shifts the placement range.
    by_chrom : bool, default False
        If True, intervals are shuffled within the chromosome they come
        from. Every chromosome holding query intervals must then have
        universe coverage.
    rng : numpy.random.Generator, int or None, optional
        Random generator, or a seed for a new one. Passing the same seed
        gives identical results.

    Returns
    -------
    DataFrame
        Shuffled intervals with columns chrom, start, end, strand. The index
        holds the index labels of the query intervals that were kept, so
        ``query.loc[result.index]`` aligns queries with their shuffles. The
        strand is taken from the hosting universe interval. Counts of
        dropped and shortened intervals are recorded in
        ``result.attrs['diagnostics']``.

    Raises
    ------
    InvalidParameterError
        If *included* is not within [0, 1].
    ExhaustedUniverseError
        If no universe interval is wide enough for any query interval.
    NoEligibleRegionsError
        If every query interval is wider than the widest universe interval.
    MissingChromosomeCoverageError
        In per-chromosome mode, if query intervals lie on a chromosome the
        universe does not cover.
    ValueError
        If intervals are malformed or reference chromosomes missing from
        *chrom_sizes*.

    See Also
    --------
    gintervals_shuffle_n : Draw several shuffles with one generator.
    gintervals_universe : Build the placement universe.

    Examples
    --------
    >>> import pyremap as pr
    >>> sizes = {"chr1": 10000, "chr2": 5000}
    >>> query = pr.gintervals("chr1", [100, 2000], [200, 2500])
    >>> pr.gintervals_shuffle(query, sizes, rng=42)  # doctest: +SKIP
    >>> universe = pr.gintervals("chr2", 0, 4000)
    >>> pr.gintervals_shuffle(query, sizes, universe=universe, included=0.5, rng=42)  # doctest: +SKIP
    """
    included = _check_included(included)
    sizes = gchrom_sizes(chrom_sizes)
    query = _check_intervals(query, "query")
    universe = gintervals_universe(sizes, universe)
    rng = _as_generator(rng)
    diagnostics = _new_diagnostics()

    if by_chrom:
        result = _shuffle_by_chrom(query, sizes, universe, included, rng, diagnostics)
    else:
        result = _shuffle_universe(query, universe, sizes, included, rng, diagnostics)

    log = _logger.info if CONFIG.get('debug') else _logger.debug
    log("shuffled %d of %d query regions (dropped universe: %d, dropped query: %d, shortened: %d)",
        len(result), len(query), diagnostics['dropped_universe'],
        diagnostics['dropped_query'], diagnostics['shortened'])

    result.attrs['diagnostics'] = diagnostics
    return result


def gintervals_shuffle_n(query, chrom_sizes, n, universe=None, included=1.0,
                         by_chrom=False, rng=None, progress=None):
    """
    Draw *n* independent shuffles of the same query.

    All shuffles consume one random generator in turn, so the whole series
    is reproducible from a single seed.

    Parameters
    ----------
    query, chrom_sizes, universe, included, by_chrom, rng
        As in :func:`gintervals_shuffle`.
    n : int
        Number of shuffles (must be positive).
    progress : bool, str or callable, optional
        Progress reporting (``True``, ``'text'``, ``'tqdm'``, ``'rich'`` or a
        callable ``cb(done, total, pct)``). Defaults to ``CONFIG['progress']``.

    Returns
    -------
    list of DataFrame
        The shuffled interval sets, in drawing order.
    """
    if isinstance(n, bool) or not isinstance(n, (int, _numpy.integer)) or n <= 0:
        raise ValueError("n must be a positive integer")
    n = int(n)

    rng = _as_generator(rng)
    shuffles = []
    with _progress_context(progress, total=n, desc="gintervals_shuffle") as cb:
        for i in range(n):
            shuffles.append(gintervals_shuffle(
                query, chrom_sizes, universe=universe, included=included,
                by_chrom=by_chrom, rng=rng,
            ))
            if cb:
                cb(i + 1, n, int(100 * (i + 1) / n))
    return shuffles
