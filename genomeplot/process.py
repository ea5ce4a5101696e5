import math
import sys

import pandas as pd

from .chromosome import Chromosome, Genome


def filter_chromosomes(chromosomes, include_non_regular: bool = False, include_mito: bool = False) -> list[Chromosome]:
    """Return chromosomes sorted canonically, dropping non-regular ones unless asked.

    A chromosome is kept if ``include_non_regular`` is set or it is regular,
    OR if ``include_mito`` is set and it is mitochondrial.  The second clause
    is a union, so chrM survives with ``include_mito`` alone.
    """
    return [
        chrom for chrom in sorted(chromosomes, key=Chromosome.sort_key)
        if (include_non_regular or chrom.is_regular)
        or (include_mito and chrom.is_mitochondrial)
    ]


def stack_pairs(chromosomes: list[Chromosome]) -> list[tuple]:
    """Pair chromosomes complementarily into two-column stacks.

    The first half each start a stack; the rest are appended in reverse, so
    ``[c1, c2, c3, c4]`` becomes ``[(c1, c4), (c2, c3)]``.  With an odd
    count the first stack holds a single chromosome:
    ``[c1, .., c5]`` becomes ``[(c1,), (c2, c5), (c3, c4)]``.
    """
    half = math.ceil(len(chromosomes) / 2)
    stacks = [[chrom] for chrom in chromosomes[:half]]
    for k, chrom in enumerate(chromosomes[half:]):
        stacks[half - 1 - k].append(chrom)
    return [tuple(stack) for stack in stacks]


def get_stacked_chromosomes(chromosomes: list[Chromosome]) -> list[tuple]:
    """Stack numbered and non-numbered chromosomes separately, numbered first."""
    numbered = [c for c in chromosomes if c.is_numbered]
    others = [c for c in chromosomes if not c.is_numbered]
    return stack_pairs(numbered) + stack_pairs(others)


def single_stacks(chromosomes: list[Chromosome]) -> list[tuple]:
    return [(chrom,) for chrom in chromosomes]


def make_stacks(chromosomes: list[Chromosome], stacked: bool) -> list[tuple]:
    if stacked:
        return get_stacked_chromosomes(chromosomes)
    return single_stacks(chromosomes)


def resolve_labels(datasets: list, labels: list | None = None) -> list[str]:
    """One label per dataset: the given label where present, else the path as given."""
    labels = labels or []
    return [
        labels[i] if i < len(labels) and labels[i] else str(path)
        for i, path in enumerate(datasets)
    ]


def rasterize_dataset(genome: Genome, label: str, intervals: pd.DataFrame, scale: float):
    """Bin one dataset onto every chromosome of *genome* under *label*.

    Rows naming a chromosome the genome does not know are dropped.  Reusing
    a label adds into the existing bins, with a single warning.
    """
    if any(label in chrom.data for chrom in genome):
        print(f'Warning: data already existed for label "{label}"; counts will be added.', file=sys.stderr)
    for chrom in genome:
        chrom.init_label(label, scale, warn=False)
    for name, group in intervals.groupby("chrom", sort=False):
        chrom = genome.get(name)
        if chrom is None:
            continue
        chrom.add_intervals(label, group["start"].to_numpy(), group["end"].to_numpy(), scale)
    return genome
