import pytest

import pyremap as pr


@pytest.fixture
def chrom_sizes():
    return {"chr1": 10000, "chr2": 5000, "chr3": 2000}


@pytest.fixture(autouse=True)
def _restore_config():
    saved = dict(pr.CONFIG)
    yield
    pr.CONFIG.clear()
    pr.CONFIG.update(saved)
