"""Error types raised while building a genome plot.

Only usage errors and problems with the annotation file abort a run.  A
dataset that cannot be read is reported and dropped, and intervals on
chromosomes missing from the annotation are silently ignored.
"""


class GenomePlotError(Exception):
    """Base class for all genomeplot errors."""


class UsageError(GenomePlotError):
    """Required command-line inputs are missing or inconsistent."""


class DatasetReadError(GenomePlotError):
    """An interval dataset could not be read; the dataset is skipped."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"could not read dataset {path}: {reason}")


class MalformedAnnotationLine(GenomePlotError, ValueError):
    """An annotation line does not have the expected tokens."""

    def __init__(self, source: str, lineno: int, reason: str):
        self.source = source
        self.lineno = lineno
        self.reason = reason
        super().__init__(f"{source}, line {lineno}: {reason}")
