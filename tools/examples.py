"""
Run a few PyReMap examples on a toy genome.

Usage:
    python tools/examples.py
"""

import pyremap as pr


def main():
    sizes = pr.gchrom_sizes({"chr1": 100000, "chr2": 50000, "chr3": 20000})

    query = pr.gintervals(
        ["chr1", "chr1", "chr2"], [100, 20000, 300], [600, 21000, 800],
        strand=[0, "+", "-"], chrom_sizes=sizes,
    )
    universe = pr.gintervals(["chr1", "chr2", "chr2"], [0, 0, 30000], [40000, 10000, 45000])

    print("Query:")
    print(query)
    print("Universe:")
    print(pr.gintervals_universe(sizes, universe))

    print("Whole-genome shuffle:")
    print(pr.gintervals_shuffle(query, sizes, rng=42))

    print("Per-chromosome shuffle inside the universe, half of each region hosted:")
    shuffled = pr.gintervals_shuffle(query, sizes, universe=universe, included=0.5,
                                     by_chrom=True, rng=42)
    print(shuffled)
    print("Diagnostics:", shuffled.attrs["diagnostics"])


if __name__ == "__main__":
    main()
