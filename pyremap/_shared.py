"""
Shared globals and utilities for PyReMap modules.

Thread-safety note:
`CONFIG` is process-global and not synchronized for concurrent mutation.
Random state is never global: every sampling call receives its own
generator (see ``_as_generator``).
"""

import sys as _sys
import warnings as _warnings
from contextlib import contextmanager

import numpy as _numpy
import pandas as _pandas

from .errors import ShuffleWarning

# Configuration dictionary
CONFIG = {
    'warnings': True,               # Emit ShuffleWarning for non-fatal conditions
    'debug': False,                 # Log shuffle diagnostics at INFO level
    'progress': False,              # False, True, 'tqdm', 'rich', 'text', or callable
    'progress_style': 'text'        # Default when progress=True
}


def _make_progress_callback(progress, total=None, desc=None):
    if progress is None:
        progress = CONFIG.get('progress', False)
    if not progress:
        return None, None

    if callable(progress):
        return progress, None

    style = progress
    if style is True:
        style = CONFIG.get('progress_style', 'text')

    if style in ('tqdm', 'auto'):
        try:
            from tqdm.auto import tqdm
            pbar = tqdm(total=total, desc=desc)

            def cb(done, total, pct):
                if total is not None and pbar.total != total:
                    pbar.total = total
                pbar.n = int(done)
                pbar.refresh()

            return cb, pbar.close
        except ImportError:
            style = 'text'

    if style == 'rich':
        try:
            from rich.progress import Progress
            progress_obj = Progress()
            progress_obj.start()
            task_id = progress_obj.add_task(desc or "working", total=total)

            def cb(done, total, pct):
                if total is not None:
                    progress_obj.update(task_id, total=total)
                progress_obj.update(task_id, completed=done)

            def close():
                progress_obj.stop()

            return cb, close
        except ImportError:
            style = 'text'

    if style == 'text':
        last = {'pct': -1}
        label = desc or "progress"

        def cb(done, total, pct):
            if pct != last['pct']:
                _sys.stderr.write(f"\r{label}: {pct}%")
                if pct >= 100:
                    _sys.stderr.write("\n")
                _sys.stderr.flush()
                last['pct'] = pct

        return cb, None

    return None, None


@contextmanager
def _progress_context(progress=None, total=None, desc=None):
    cb, close = _make_progress_callback(progress, total=total, desc=desc)
    try:
        yield cb
    finally:
        if close:
            close()


def _as_generator(rng):
    """Return a numpy Generator for *rng* (None, seed, SeedSequence or Generator).

    A Generator is returned unchanged, so a caller-owned stream keeps
    advancing across calls.
    """
    if isinstance(rng, _numpy.random.RandomState):
        raise TypeError(
            "rng must be a numpy.random.Generator, a seed or None; "
            "legacy RandomState objects are not supported"
        )
    return _numpy.random.default_rng(rng)


def _warn(message):
    """Emit a ShuffleWarning unless disabled through CONFIG['warnings']."""
    if CONFIG.get('warnings', True):
        _warnings.warn(message, ShuffleWarning, stacklevel=3)


def _empty_intervals(strand=True):
    cols = {
        'chrom': _pandas.Series([], dtype=object),
        'start': _pandas.Series([], dtype=_numpy.int64),
        'end': _pandas.Series([], dtype=_numpy.int64),
    }
    if strand:
        cols['strand'] = _pandas.Series([], dtype=_numpy.int64)
    return _pandas.DataFrame(cols)
