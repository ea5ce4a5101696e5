import pytest

from genomeplot.interval import Interval, natsort_key


class TestOverlap:
    def test_same_chrom_overlapping(self):
        assert Interval("chr1", 0, 100).overlaps(Interval("chr1", 50, 150))

    def test_shared_boundary_is_not_overlap(self):
        """Half-open intervals that only touch do not overlap."""
        assert not Interval("chr1", 0, 100).overlaps(Interval("chr1", 100, 200))
        assert not Interval("chr1", 100, 200).overlaps(Interval("chr1", 0, 100))

    def test_different_chrom(self):
        assert not Interval("chr1", 0, 100).overlaps(Interval("chr2", 0, 100))

    def test_containment(self):
        assert Interval("chr1", 0, 1000).overlaps(Interval("chr1", 10, 20))


class TestValidation:
    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            Interval("chr1", -1, 10)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            Interval("chr1", 10, 5)

    def test_length(self):
        assert Interval("chr1", 10, 35).length == 25


class TestOrdering:
    def test_chrom_then_start_then_end(self):
        intervals = [
            Interval("chr2", 0, 10),
            Interval("chr1", 5, 10),
            Interval("chr1", 0, 20),
            Interval("chr1", 0, 10),
        ]
        assert sorted(intervals, key=Interval.sort_key) == [
            Interval("chr1", 0, 10),
            Interval("chr1", 0, 20),
            Interval("chr1", 5, 10),
            Interval("chr2", 0, 10),
        ]

    def test_chromosome_names_sort_naturally(self):
        names = ["chr10", "chrX", "chr2", "chr1", "chr1_KI270706v1_random", "chrM"]
        assert sorted(names, key=natsort_key) == [
            "chr1", "chr1_KI270706v1_random", "chr2", "chr10", "chrM", "chrX",
        ]
