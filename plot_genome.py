"""Genome-wide plot of BED interval data.

Usage:
    python plot_genome.py (-c chrom.sizes | -i cytoBandIdeo.txt) [options] <bed_files ...>

Annotation (at least one required):
    -c/--chrom-sizes     UCSC chrom.sizes file (name, size)
    -i/--cytoband-ideo   UCSC cytoBandIdeo file (chrom, start, end, name, gieStain)
    When both are given, chromosomes come from the sizes file and cytobands
    are drawn on top of them.

Each BED file becomes one track per chromosome, binned at --scale base pairs
per unit.  A BED file that cannot be read is reported and left out.

Output:
    A single SVG document on standard output, or written to --output.
"""

import argparse
import sys
from pathlib import Path

from genomeplot import io, process
from genomeplot.errors import MalformedAnnotationLine, UsageError
from genomeplot.figures import genome_plot
from genomeplot.layout import PlotParams, compute_layout

__version__ = "0.1.0"


def _label_list(value: str) -> list:
    return value.strip().split(",")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Create a genome-wide plot of BED data as SVG.",
    )
    parser.add_argument("bed_files", nargs="*", type=Path, help="BED-like data files")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--chrom-sizes", type=Path, metavar="FILE",
                        help="A file in UCSC chrom.sizes format")
    parser.add_argument("-i", "--cytoband-ideo", type=Path, metavar="FILE",
                        help="A file in UCSC cytoBandIdeo format")
    parser.add_argument("-l", "--labels", type=_label_list, default=None, metavar="LABELS",
                        help="Labels for the data files, separated by comma (,). "
                             "Defaults to the file names.")
    parser.add_argument("-t", "--stacked", action="store_true",
                        help="Stack chromosomes into two columns for a shorter figure. "
                             "Numbered chromosomes are stacked complementarily; "
                             "sex chromosomes and contigs are stacked separately.")
    parser.add_argument("-s", "--scale", type=int, default=100000, metavar="N",
                        help="Horizontal scale in bp per unit (default: 100000). "
                             "This is the smallest distinguishable feature in the output.")
    parser.add_argument("-b", "--with-borders", action="store_true",
                        help="Add borders to data entries. Makes tiny data more visible "
                             "at the expense of resolution.")
    parser.add_argument("-e", "--height", type=float, default=5,
                        help="Vertical height for every dataset (default: 5)")
    parser.add_argument("-y", "--cytoband-height", type=float, default=10,
                        help="Vertical height for cytoband ideograms (default: 10)")
    parser.add_argument("-r", "--chromosome-bar-height", type=float, default=1,
                        help="Vertical height for the chromosome bar when no cytobands "
                             "are drawn (default: 1)")
    parser.add_argument("-G", "--gap", type=float, default=15,
                        help="Vertical gap between chromosomes (default: 15)")
    parser.add_argument("-g", "--in-gap", type=float, default=2,
                        help="Vertical gap between datasets within a chromosome (default: 2)")
    parser.add_argument("-z", "--horizontal-gap", type=float, default=50,
                        help="Minimal horizontal gap when stacking chromosomes (default: 50)")
    parser.add_argument("-x", "--text-size", type=float, default=16,
                        help="Size of the label text in px (default: 16)")
    parser.add_argument("-p", "--text-gap", type=float, default=10,
                        help="Minimal horizontal gap between text and the figure (default: 10)")
    parser.add_argument("-N", "--include-non-regular", action="store_true",
                        help='Include chromosomes that are not regular ("chrUn", alternatives, etc.)')
    parser.add_argument("-M", "--include-mito", action="store_true",
                        help='Include the mitochondrial chromosome "chrM"')
    parser.add_argument("-o", "--output", type=Path, default=None, metavar="FILE",
                        help="Write the SVG here instead of standard output")
    return parser


def validate_args(args):
    if not args.bed_files:
        raise UsageError("no BED data files given")
    if args.chrom_sizes is None and args.cytoband_ideo is None:
        raise UsageError("either --chrom-sizes or --cytoband-ideo is required")
    if args.scale <= 0:
        raise UsageError(f"--scale must be positive, got {args.scale}")


def params_from_args(args) -> PlotParams:
    return PlotParams(
        scale=args.scale,
        height=args.height,
        cytoband_height=args.cytoband_height,
        chromosome_bar_height=args.chromosome_bar_height,
        gap=args.gap,
        in_gap=args.in_gap,
        horizontal_gap=args.horizontal_gap,
        text_size=args.text_size,
        text_gap=args.text_gap,
        stacked=args.stacked,
        with_borders=args.with_borders,
    )


def create_genome_plot(args) -> str:
    """Run the whole pipeline for parsed arguments and return the SVG markup."""
    params = params_from_args(args)
    labels = process.resolve_labels(args.bed_files, args.labels)

    # --- Read annotation and datasets ---
    print(f"Reading annotation and {len(args.bed_files)} dataset(s)...", file=sys.stderr)
    genome, frames = io.load_inputs(args.bed_files, args.chrom_sizes, args.cytoband_ideo)
    print(f"  {len(genome)} chromosome(s) in annotation", file=sys.stderr)

    chromosomes = process.filter_chromosomes(genome, args.include_non_regular, args.include_mito)
    stacks = process.make_stacks(chromosomes, params.stacked)
    print(f"  {len(chromosomes)} chromosome(s) kept in {len(stacks)} row(s)", file=sys.stderr)

    # --- Rasterize ---
    loaded_labels = []
    for label, frame in zip(labels, frames):
        if frame is None:
            continue
        process.rasterize_dataset(genome, label, frame, params.scale)
        loaded_labels.append(label)
        print(f"  {label}: {len(frame)} intervals", file=sys.stderr)

    # --- Lay out and draw ---
    layout = compute_layout(stacks, params, len(loaded_labels), genome.has_cytobands)
    surface = genome_plot.make_plot(stacks, loaded_labels, layout)
    return surface.tostring()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        validate_args(args)
    except UsageError as err:
        print("Please specify BED data files and either chromosomal size "
              "information or cytoband ideogram information!", file=sys.stderr)
        parser.print_help(sys.stderr)
        sys.exit(f"Error: {err}")

    try:
        svg = create_genome_plot(args)
    except MalformedAnnotationLine as err:
        sys.exit(f"Error: malformed annotation: {err}")
    except OSError as err:
        sys.exit(f"Error: could not read annotation: {err}")

    io.save_figure(svg, args.output)


if __name__ == "__main__":
    main()
