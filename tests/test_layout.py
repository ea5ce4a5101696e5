import pytest

from genomeplot.chromosome import Chromosome
from genomeplot.layout import BORDER_GAP, TEXT_RATIO, PlotParams, compute_layout


def params(**kwargs):
    defaults = dict(scale=100, height=5, in_gap=2, gap=15, horizontal_gap=50,
                    text_size=10, text_gap=10, cytoband_height=10, chromosome_bar_height=1)
    defaults.update(kwargs)
    return PlotParams(**defaults)


class TestWidth:
    def test_single_column(self):
        stacks = [(Chromosome("chr1", 1000),), (Chromosome("chr22", 500),)]
        layout = compute_layout(stacks, params(), 1, False)
        label = len("chr22") * TEXT_RATIO * 10
        assert layout.label_widths == (pytest.approx(label),)
        assert layout.width == pytest.approx(10 + 10 + label + 2 * BORDER_GAP)

    def test_two_columns(self):
        stacks = [
            (Chromosome("chr1", 1000), Chromosome("chr10", 400)),
            (Chromosome("chr2", 800),),
        ]
        layout = compute_layout(stacks, params(stacked=True), 1, False)
        left = len("chr1") * TEXT_RATIO * 10
        right = len("chr10") * TEXT_RATIO * 10
        assert layout.label_widths == (pytest.approx(left), pytest.approx(right))
        internal = 1000 / 100 + 400 / 100 + 50
        assert layout.width == pytest.approx(internal + 10 + left + 2 + 10 + right + 2)

    def test_stacked_without_pairs_adds_no_right_gutter(self):
        stacks = [(Chromosome("chr1", 1000),)]
        layout = compute_layout(stacks, params(stacked=True), 1, False)
        assert layout.label_widths[1] == 0
        assert layout.width == pytest.approx(10 + 10 + 4 * TEXT_RATIO * 10 + 2)


class TestHeight:
    def test_entry_height_with_cytobands(self):
        layout = compute_layout([(Chromosome("chr1", 100),)], params(), 2, True)
        assert layout.entry_height == 2 * (5 + 2) + 10
        assert layout.chromosome_y == 14

    def test_entry_height_with_bar(self):
        layout = compute_layout([(Chromosome("chr1", 100),)], params(), 2, False)
        assert layout.entry_height == 2 * (5 + 2) + 1

    def test_no_trailing_gap(self):
        stacks = [(Chromosome(f"chr{i}", 100),) for i in range(1, 4)]
        layout = compute_layout(stacks, params(), 1, False)
        entry = 5 + 2 + 1
        assert layout.height == 3 * (entry + 2 * BORDER_GAP + 15) - 15

    def test_failed_datasets_shrink_height(self):
        stacks = [(Chromosome("chr1", 100),)]
        assert compute_layout(stacks, params(), 1, True).height < compute_layout(stacks, params(), 2, True).height

    def test_empty(self):
        assert compute_layout([], params(), 1, False).height == 0


class TestPlacement:
    def test_columns(self):
        left, right = Chromosome("chr1", 1000), Chromosome("chr10", 400)
        layout = compute_layout([(left, right), (Chromosome("chr2", 500),)], params(stacked=True), 1, False)
        p0 = layout.placement(0, 0, left)
        assert p0.x == pytest.approx(layout.label_widths[0] + 10)
        assert p0.width == pytest.approx(11)
        p1 = layout.placement(0, 1, right)
        assert p1.x + p1.width == pytest.approx(layout.width - layout.label_widths[1] - 10)
        assert layout.placement(1, 0, left).y == pytest.approx(layout.entry_height + 2 * BORDER_GAP + 15)

    def test_label_anchor(self):
        left, right = Chromosome("chr1", 1000), Chromosome("chr10", 400)
        layout = compute_layout([(left, right)], params(stacked=True), 1, False)
        x0, y0, a0 = layout.label_anchor(0, 0)
        x1, _, a1 = layout.label_anchor(0, 1)
        assert (x0, a0) == (layout.label_widths[0], "end")
        assert (x1, a1) == (layout.width - layout.label_widths[1], "start")
        assert y0 == pytest.approx(layout.entry_height / 2 + 5)


def test_scale_must_be_positive():
    with pytest.raises(ValueError):
        PlotParams(scale=0)
