# Shared constants used across the drawing modules.
# Dataset track i is drawn in PALETTE[i % len(PALETTE)].

# Adapted from Paul Tol's "Muted" qualitative scheme (https://personal.sron.nl/~pault/)
PALETTE = [
    "#CC6677",  # rose
    "#332288",  # indigo
    "#DDCC77",  # sand
    "#117733",  # green
    "#88CCEE",  # cyan
    "#882255",  # wine
    "#44AA99",  # teal
    "#999933",  # olive
    "#AA4499",  # purple
]

CYTOBAND_COLOR = "#777777"
ARM_BACKGROUND = "#FFFFFF"
OUTLINE_COLOR = "#000000"
BAR_COLOR = "#000000"

HATCH_ID = "hatch_fill"
ARM_CORNER_RATIO = 0.25   # corner radius as a fraction of the cytoband height

FONT_FAMILY = "Arial, Helvetica, sans-serif"
