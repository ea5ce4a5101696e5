import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pandas as pd

from .chromosome import Cytoband, Genome, GenomeBuilder
from .errors import DatasetReadError, MalformedAnnotationLine
from .interval import Interval

BED_COLUMNS = ["chrom", "start", "end"]


def _tokenized_lines(text: str, source: str, n_tokens: int):
    """Yield ``(lineno, tokens)`` for each non-empty line, checking the token count."""
    for lineno, line in enumerate(text.splitlines(), 1):
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) != n_tokens:
            raise MalformedAnnotationLine(
                source, lineno, f"expected {n_tokens} fields, found {len(tokens)}"
            )
        yield lineno, tokens


def _coordinate(token: str, source: str, lineno: int, what: str) -> int:
    try:
        value = int(token)
    except ValueError:
        raise MalformedAnnotationLine(source, lineno, f"{what} {token!r} is not an integer") from None
    if value < 0:
        raise MalformedAnnotationLine(source, lineno, f"{what} {value} is negative")
    return value


def parse_sizes(text: str, source: str = "<sizes>", builder: GenomeBuilder | None = None) -> GenomeBuilder:
    """Parse a UCSC chrom.sizes file (``name size`` per line).

    The first size seen for a name wins; later duplicates are ignored.
    """
    builder = builder if builder is not None else GenomeBuilder()
    for lineno, (name, size) in _tokenized_lines(text, source, 2):
        builder.add_chromosome(name, _coordinate(size, source, lineno, "size"))
    return builder


def parse_cytobands(text: str, source: str = "<cytobands>", builder: GenomeBuilder | None = None) -> GenomeBuilder:
    """Parse a UCSC cytoBandIdeo file.

    Columns are ``chrom chromStart chromEnd name gieStain``.  Chromosomes not
    already in *builder* are created sized to their first band and grow as
    further bands extend past the current length.
    """
    builder = builder if builder is not None else GenomeBuilder()
    for lineno, (chrom, start, end, band_name, stain) in _tokenized_lines(text, source, 5):
        start = _coordinate(start, source, lineno, "start")
        end = _coordinate(end, source, lineno, "end")
        if end < start:
            raise MalformedAnnotationLine(source, lineno, f"end {end} precedes start {start}")
        builder.add_cytoband(Cytoband(Interval(chrom, start, end, band_name), stain))
    return builder


def read_annotation(chrom_sizes: Path | None = None, cytoband_ideo: Path | None = None) -> Genome:
    """Build the chromosome collection from a sizes file, a cytoband file, or both.

    When both are given the sizes file declares the chromosomes and the
    cytobands are merged into them.  Read errors are not caught here: the
    annotation is required for every later step.
    """
    if chrom_sizes is None and cytoband_ideo is None:
        raise ValueError("either a chrom.sizes or a cytoBandIdeo file is required")
    builder = GenomeBuilder()
    if chrom_sizes is not None:
        parse_sizes(Path(chrom_sizes).read_text(), str(chrom_sizes), builder)
    if cytoband_ideo is not None:
        parse_cytobands(Path(cytoband_ideo).read_text(), str(cytoband_ideo), builder)
    return builder.freeze()


def read_dataset(path: Path) -> pd.DataFrame:
    """Read a BED-like file into a DataFrame with columns chrom, start, end.

    Only the first three whitespace-delimited columns are used; strand, score
    and any further columns are ignored.  Rows whose coordinates are not
    integers are dropped.  Raises ``DatasetReadError`` if the file cannot be
    read or has no usable rows.
    """
    try:
        df = pd.read_csv(
            path, sep=r"\s+", header=None, usecols=[0, 1, 2], names=BED_COLUMNS,
            dtype={"chrom": "string"}, comment="#",
        )
    except (OSError, ValueError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DatasetReadError(path, str(exc)) from exc

    df["chrom"] = df["chrom"].astype(str)
    df["start"] = pd.to_numeric(df["start"], errors="coerce")
    df["end"] = pd.to_numeric(df["end"], errors="coerce")
    bad = df["start"].isna() | df["end"].isna() | (df["start"] < 0) | (df["end"] < df["start"])
    if bad.any():
        print(f"Warning: {path}: skipping {int(bad.sum())} malformed line(s)", file=sys.stderr)
        df = df.loc[~bad]
    if df.empty:
        raise DatasetReadError(path, "no intervals found")
    return df.astype({"start": "int64", "end": "int64"}).reset_index(drop=True)


def _read_dataset_or_none(path: Path):
    try:
        return read_dataset(path)
    except DatasetReadError as err:
        print(f"Warning: {err}; dataset skipped", file=sys.stderr)
        return None


def load_inputs(datasets: list, chrom_sizes: Path | None = None, cytoband_ideo: Path | None = None, max_workers: int | None = None):
    """Read the annotation and every dataset concurrently.

    Returns ``(genome, frames)`` where ``frames`` has one entry per dataset
    path, ``None`` for datasets that failed to load.  The genome is fully
    built and frozen before this returns.
    """
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        genome_future = pool.submit(read_annotation, chrom_sizes, cytoband_ideo)
        frame_futures = [pool.submit(_read_dataset_or_none, Path(p)) for p in datasets]
        frames = [f.result() for f in frame_futures]
        genome = genome_future.result()
    return genome, frames


def save_figure(svg: str, path: Path | None = None):
    """Write the SVG document to *path*, or to standard output when no path is given."""
    if path is None:
        sys.stdout.write(svg)
        sys.stdout.write("\n")
        sys.stdout.flush()
        return
    Path(path).write_text(svg)
    print(f"  Saved: {Path(path).name}", file=sys.stderr)
