"""Interval creation, chromosome-size tables and universe construction."""

from pathlib import Path

from ._shared import (
    _empty_intervals,
    _numpy,
    _pandas,
)

_STRAND_CODES = {'+': 1, '-': -1, '*': 0, '.': 0, 1: 1, -1: -1, 0: 0}


def gchrom_sizes(chrom_sizes):
    """
    Normalize a chromosome-size table.

    Parameters
    ----------
    chrom_sizes : dict, Series or DataFrame
        Mapping of chromosome name to length. A DataFrame must have a
        ``chrom`` column and either a ``size`` or an ``end`` column (the
        latter is what :func:`gintervals_all` returns).

    Returns
    -------
    Series
        Chromosome lengths (int64) indexed by chromosome name, named
        ``size``, in the order given by the caller.

    Raises
    ------
    ValueError
        If the table is malformed, contains duplicate chromosomes or
        non-positive lengths.

    Examples
    --------
    >>> import pyremap as pr
    >>> pr.gchrom_sizes({"chr1": 1000, "chr2": 500})  # doctest: +SKIP
    """
    if chrom_sizes is None:
        raise ValueError("chrom_sizes cannot be None")

    if isinstance(chrom_sizes, _pandas.DataFrame):
        if "chrom" not in chrom_sizes.columns:
            raise ValueError("chrom_sizes must have a 'chrom' column")
        if "size" in chrom_sizes.columns:
            col = "size"
        elif "end" in chrom_sizes.columns:
            col = "end"
        else:
            raise ValueError("chrom_sizes must have a 'size' or 'end' column")
        sizes = _pandas.Series(
            chrom_sizes[col].to_numpy(),
            index=chrom_sizes["chrom"].astype(str).to_numpy(),
        )
    elif isinstance(chrom_sizes, _pandas.Series):
        sizes = chrom_sizes.copy()
        sizes.index = sizes.index.astype(str)
    elif isinstance(chrom_sizes, dict):
        sizes = _pandas.Series(
            list(chrom_sizes.values()),
            index=[str(c) for c in chrom_sizes],
            dtype=object,
        )
    else:
        raise TypeError(
            "chrom_sizes must be a dict, a pandas Series or a pandas DataFrame"
        )

    if sizes.index.has_duplicates:
        dups = sorted(set(sizes.index[sizes.index.duplicated()]))
        raise ValueError(f"Duplicate chromosomes in chrom_sizes: {', '.join(dups)}")

    try:
        values = sizes.to_numpy(dtype=_numpy.int64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"chrom_sizes must contain integer lengths: {e}") from e
    if (values <= 0).any():
        bad = sizes.index[values <= 0][0]
        raise ValueError(f"Chromosome {bad} must have a positive length")

    sizes = _pandas.Series(values, index=sizes.index, name="size")
    sizes.index.name = "chrom"
    return sizes


def gchrom_sizes_load(path):
    """
    Load a chromosome-size table from a UCSC ``chrom.sizes`` style file.

    The file has two whitespace-delimited columns, chromosome name and
    length. Lines starting with ``#`` are ignored.

    Parameters
    ----------
    path : str or Path
        Path to the sizes file.

    Returns
    -------
    Series
        Normalized table as returned by :func:`gchrom_sizes`.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = _pandas.read_csv(
        path,
        sep=r"\s+",
        header=None,
        comment="#",
        usecols=[0, 1],
        names=["chrom", "size"],
        dtype={"chrom": str},
    )
    return gchrom_sizes(df)


def gintervals_all(chrom_sizes):
    """
    Return full-chromosome intervals for every chromosome of a size table.

    Parameters
    ----------
    chrom_sizes : dict, Series or DataFrame
        Chromosome-size table (see :func:`gchrom_sizes`).

    Returns
    -------
    DataFrame
        One interval per chromosome with columns chrom, start, end, in
        size-table order.

    See Also
    --------
    gintervals : Create a custom set of 1D intervals.
    gintervals_universe : Build the placement universe for shuffling.

    Examples
    --------
    >>> import pyremap as pr
    >>> pr.gintervals_all({"chr1": 1000, "chr2": 500})  # doctest: +SKIP
    """
    sizes = gchrom_sizes(chrom_sizes)
    return _pandas.DataFrame({
        'chrom': sizes.index.to_numpy(dtype=object),
        'start': _numpy.zeros(len(sizes), dtype=_numpy.int64),
        'end': sizes.to_numpy(),
    })


def _normalize_strand(values):
    codes = []
    for s in values:
        if isinstance(s, str):
            s = s.strip()
        elif s is not None and not isinstance(s, bool):
            try:
                s = int(s)
            except (TypeError, ValueError):
                pass
        if s not in _STRAND_CODES:
            raise ValueError(f"Invalid strand value {s!r}: must be -1, 0, 1, '+', '-' or '*'")
        codes.append(_STRAND_CODES[s])
    return codes


def gintervals(chroms, starts=0, ends=-1, strand=None, chrom_sizes=None):
    """
    Create a 1D intervals DataFrame.

    Constructs an intervals DataFrame from parallel arrays of chromosome
    names, start coordinates, and end coordinates. Scalar arguments are
    broadcast to match the longest array.

    Parameters
    ----------
    chroms : str or list
        Chromosome names.
    starts : int or list of int, default 0
        Start coordinates (0-based, inclusive).
    ends : int or list of int, default -1
        End coordinates (0-based, exclusive). ``-1`` means full chromosome
        length and requires *chrom_sizes*.
    strand : int, str or list, optional
        Strand information (``-1``, ``0``, ``1`` or ``"-"``, ``"*"``, ``"+"``).
    chrom_sizes : dict, Series or DataFrame, optional
        Chromosome-size table. When given, chromosomes must be known and
        ends must not exceed the chromosome length.

    Returns
    -------
    DataFrame
        Sorted intervals with columns: chrom, start, end (and optionally
        strand).

    See Also
    --------
    gintervals_all : Return full-chromosome intervals for every chromosome.
    gintervals_from_bed : Create intervals from a BED file.

    Examples
    --------
    >>> import pyremap as pr
    >>> sizes = {"chr1": 10000, "chr2": 5000}
    >>> pr.gintervals("chr1", 1000, chrom_sizes=sizes)  # doctest: +SKIP
    >>> pr.gintervals(["chr1", "chr2"], 10, [3000, 4000])  # doctest: +SKIP
    """
    result_chroms, result_starts, result_ends = _make_1d_intervals(
        chroms, starts, ends, chrom_sizes
    )

    result_strands = None
    if strand is not None:
        if isinstance(strand, (int, str)):
            strand = [strand]
        strand = list(strand)
        n = len(result_chroms)
        if len(strand) == 1:
            strand = strand * n
        if len(strand) != n:
            raise ValueError("strand must have the same length as other arguments")
        result_strands = _normalize_strand(strand)

    df = _pandas.DataFrame({
        'chrom': _pandas.Series(result_chroms, dtype=object),
        'start': _numpy.asarray(result_starts, dtype=_numpy.int64),
        'end': _numpy.asarray(result_ends, dtype=_numpy.int64),
    })

    if result_strands is not None:
        df['strand'] = _numpy.asarray(result_strands, dtype=_numpy.int64)

    return df.sort_values(['chrom', 'start'], kind='stable').reset_index(drop=True)


def _make_1d_intervals(chroms, starts, ends, chrom_sizes=None):
    """Shared helper: validate and expand 1D interval args, return lists."""
    if isinstance(chroms, str):
        chroms = [chroms]
    if isinstance(starts, (int, float, _numpy.integer)):
        starts = [starts]
    if isinstance(ends, (int, float, _numpy.integer)):
        ends = [ends]

    chroms = [str(c) for c in chroms]
    starts = [int(s) for s in starts]
    ends = [int(e) for e in ends]

    n = max(len(chroms), len(starts), len(ends))
    if len(chroms) == 1:
        chroms = chroms * n
    if len(starts) == 1:
        starts = starts * n
    if len(ends) == 1:
        ends = ends * n

    if not (len(chroms) == len(starts) == len(ends)):
        raise ValueError("chroms, starts, and ends must have the same length")

    sizes = None
    if chrom_sizes is not None:
        sizes = gchrom_sizes(chrom_sizes).to_dict()

    for i in range(n):
        chrom = chroms[i]
        start = starts[i]
        end = ends[i]

        chrom_size = None
        if sizes is not None:
            if chrom not in sizes:
                raise ValueError(f"Unknown chromosome: {chrom}")
            chrom_size = sizes[chrom]
        if end == -1:
            if chrom_size is None:
                raise ValueError("ends=-1 (full chromosome) requires chrom_sizes")
            end = chrom_size
            ends[i] = end
        if start < 0:
            raise ValueError(f"Invalid interval ({chrom}, {start}, {end}): start must be >= 0")
        if start >= end:
            raise ValueError(f"Invalid interval ({chrom}, {start}, {end}): start must be < end")
        if chrom_size is not None and end > chrom_size:
            raise ValueError(f"Invalid interval ({chrom}, {start}, {end}): end exceeds chromosome size ({chrom_size})")

    return chroms, starts, ends


def gintervals_from_bed(path, has_strand=False, chrom_sizes=None):
    """
    Create intervals from a BED-like file.

    Reads a tab- or space-delimited file with at least three columns
    (chrom, start, end). ``track``/``browser`` header lines and ``#``
    comments are skipped.

    Parameters
    ----------
    path : str or Path
        Path to BED file (chrom, start, end[, ...]).
    has_strand : bool, default False
        If True, use column 6 for strand when present.
    chrom_sizes : dict, Series or DataFrame, optional
        Chromosome-size table used for validation.

    Returns
    -------
    DataFrame or None
        Sorted intervals, or ``None`` if the file contains no intervals.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    chroms, starts, ends, strands = [], [], [], []
    with path.open() as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith(("#", "track", "browser")):
                continue
            parts = line.split()
            if len(parts) < 3:
                continue
            chroms.append(parts[0])
            starts.append(int(parts[1]))
            ends.append(int(parts[2]))
            strands.append(parts[5] if len(parts) >= 6 else 0)

    if not chroms:
        return None

    return gintervals(chroms, starts, ends, strands if has_strand else None,
                      chrom_sizes=chrom_sizes)


def _check_intervals(intervals, name="intervals"):
    """Validate an intervals DataFrame and return a normalized copy.

    The copy keeps the input index and always carries a strand column.
    """
    if intervals is None:
        raise ValueError(f"{name} cannot be None")
    if not isinstance(intervals, _pandas.DataFrame):
        raise TypeError(f"{name} must be a DataFrame")
    if not {"chrom", "start", "end"}.issubset(intervals.columns):
        raise ValueError(f"{name} must have columns: chrom, start, end")

    if len(intervals) == 0:
        out = _empty_intervals()
        return out

    out = _pandas.DataFrame({
        'chrom': intervals["chrom"].astype(str).to_numpy(dtype=object),
        'start': intervals["start"].to_numpy(dtype=_numpy.int64),
        'end': intervals["end"].to_numpy(dtype=_numpy.int64),
    }, index=intervals.index)

    if "strand" in intervals.columns:
        out['strand'] = _numpy.asarray(
            _normalize_strand(intervals["strand"].tolist()), dtype=_numpy.int64
        )
    else:
        out['strand'] = _numpy.zeros(len(out), dtype=_numpy.int64)

    bad = out["start"] < 0
    if bad.any():
        row = out[bad].iloc[0]
        raise ValueError(f"Invalid interval ({row['chrom']}, {row['start']}, {row['end']}) in {name}: start must be >= 0")
    bad = out["start"] >= out["end"]
    if bad.any():
        row = out[bad].iloc[0]
        raise ValueError(f"Invalid interval ({row['chrom']}, {row['start']}, {row['end']}) in {name}: start must be < end")

    return out


def gintervals_canonic(intervals, unify_touching_intervals=True):
    """
    Convert intervals to canonical form.

    Sorts intervals and merges overlapping ones. If
    ``unify_touching_intervals`` is True, adjacent intervals (where one's
    end equals another's start) are also merged. The result has no overlaps
    and is properly sorted. A merged interval keeps its members' strand
    when they all agree and is unstranded (0) otherwise.

    Parameters
    ----------
    intervals : DataFrame
        Intervals to canonicalize (chrom, start, end[, strand]).
    unify_touching_intervals : bool, default True
        Whether to merge touching (end == start) intervals.

    Returns
    -------
    DataFrame
        Canonical intervals with columns chrom, start, end, strand. Empty
        input gives an empty DataFrame.

    Raises
    ------
    ValueError
        If *intervals* is ``None`` or contains invalid intervals.

    See Also
    --------
    gintervals_universe : Build the placement universe for shuffling.

    Examples
    --------
    >>> import pyremap as pr
    >>> intervs = pr.gintervals("chr1", [0, 200, 100], [150, 300, 250])
    >>> pr.gintervals_canonic(intervs)  # doctest: +SKIP
    """
    df = _check_intervals(intervals)
    if len(df) == 0:
        return df

    df = df.sort_values(['chrom', 'start', 'end'], kind='stable').reset_index(drop=True)

    # Largest end seen so far on the chromosome, excluding the current row
    prev_end = df.groupby('chrom', sort=False)['end'].cummax()
    prev_end = prev_end.groupby(df['chrom'], sort=False).shift()
    if unify_touching_intervals:
        new_block = prev_end.isna() | (df['start'] > prev_end)
    else:
        new_block = prev_end.isna() | (df['start'] >= prev_end)
    block = new_block.cumsum()

    grouped = df.groupby(block, sort=False)
    strand_min = grouped['strand'].min()
    strand_max = grouped['strand'].max()
    merged = _pandas.DataFrame({
        'chrom': grouped['chrom'].first(),
        'start': grouped['start'].min(),
        'end': grouped['end'].max(),
        'strand': strand_min.where(strand_min == strand_max, 0),
    })
    merged['start'] = merged['start'].astype(_numpy.int64)
    merged['end'] = merged['end'].astype(_numpy.int64)
    merged['strand'] = merged['strand'].astype(_numpy.int64)
    return merged.reset_index(drop=True)


def gintervals_universe(chrom_sizes, universe=None):
    """
    Build the disjoint genomic space in which shuffled intervals are placed.

    Without *universe* the whole genome is used: one interval spanning each
    chromosome of the size table. A caller-supplied universe is merged
    into disjoint intervals with :func:`gintervals_canonic` and clipped to
    the chromosome lengths; intervals starting at or past the end of their
    chromosome are dropped.

    Parameters
    ----------
    chrom_sizes : dict, Series or DataFrame
        Chromosome-size table (see :func:`gchrom_sizes`).
    universe : DataFrame, optional
        Allowed placement intervals.

    Returns
    -------
    DataFrame
        Disjoint universe intervals with columns chrom, start, end, strand.
        An empty universe yields an empty DataFrame.

    Raises
    ------
    ValueError
        If *universe* holds intervals on chromosomes missing from
        *chrom_sizes*.

    Examples
    --------
    >>> import pyremap as pr
    >>> pr.gintervals_universe({"chr1": 1000, "chr2": 500})  # doctest: +SKIP
    """
    if universe is None:
        full = gintervals_all(chrom_sizes)
        full['strand'] = _numpy.zeros(len(full), dtype=_numpy.int64)
        return full

    sizes = gchrom_sizes(chrom_sizes)
    merged = gintervals_canonic(universe)

    unknown = sorted(set(merged['chrom']) - set(sizes.index))
    if unknown:
        raise ValueError(f"Unknown chromosome in universe: {', '.join(unknown)}")

    lengths = sizes.reindex(merged['chrom']).to_numpy(dtype=_numpy.int64)
    merged['end'] = _numpy.minimum(merged['end'].to_numpy(dtype=_numpy.int64), lengths)
    merged = merged[merged['start'] < merged['end']]
    return merged.reset_index(drop=True)
