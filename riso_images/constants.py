from typing import Tuple

RGB = Tuple[int, int, int]

# Screen angle cycle for inks without an explicit angle.
# Neighbouring entries are spread apart to keep overlapping screens from beating (moire).
DEFAULT_ANGLES: Tuple[float, ...] = (15.0, 75.0, 0.0, 45.0, 30.0, 60.0, 90.0, 105.0)

# Decomposition reference, independent of paper color so dark paper still yields ink
WHITE: RGB = (255, 255, 255)

# Default paper (warm off-white)
DEFAULT_PAPER: RGB = (245, 240, 232)

DEFAULT_INK_OPACITY: float = 0.85

# Pixels with alpha below this are treated as empty
MIN_ALPHA: float = 0.01

# Opacity below this deposits no ink
MIN_OPACITY: float = 0.004

# Fixed number of Gauss-Seidel sweeps in the density solver
SOLVER_SWEEPS: int = 12

# Gram diagonal at or below this is a degenerate ink (e.g. equal to the reference white)
DEGENERATE_DOT: float = 1e-10

# 32-bit integer hash mix
HASH_MASK: int = 0xFFFFFFFF
HASH_X: int = 374761393
HASH_Y: int = 668265263
HASH_SEED: int = 1013904223
HASH_MUL: int = 1274126177
HASH_SCALE: float = 4294967296.0

# Scuff lattice seed per ink: index * prime + offset
SCUFF_SEED_PRIME: int = 7919
SCUFF_SEED_OFFSET: int = 31
SCUFF_MIN_CELL: float = 6.0

# Catalog of Riso spot inks (published drum colors)
RISO_INKS = {
    'black': {'name': 'Black', 'color': '#000000'},
    'burgundy': {'name': 'Burgundy', 'color': '#914E72'},
    'blue': {'name': 'Blue', 'color': '#0078BF'},
    'green': {'name': 'Green', 'color': '#00A95C'},
    'medium_blue': {'name': 'Medium Blue', 'color': '#3255A4'},
    'bright_red': {'name': 'Bright Red', 'color': '#F15060'},
    'federal_blue': {'name': 'Federal Blue', 'color': '#3D5588'},
    'purple': {'name': 'Purple', 'color': '#765BA7'},
    'teal': {'name': 'Teal', 'color': '#00838A'},
    'flat_gold': {'name': 'Flat Gold', 'color': '#BB8B41'},
    'hunter_green': {'name': 'Hunter Green', 'color': '#407060'},
    'red': {'name': 'Red', 'color': '#FF665E'},
    'brown': {'name': 'Brown', 'color': '#925F52'},
    'yellow': {'name': 'Yellow', 'color': '#FFE800'},
    'marine_red': {'name': 'Marine Red', 'color': '#D2515E'},
    'orange': {'name': 'Orange', 'color': '#FF6C2F'},
    'fluorescent_pink': {'name': 'Fluorescent Pink', 'color': '#FF48B0'},
    'light_gray': {'name': 'Light Gray', 'color': '#88898A'},
    'aqua': {'name': 'Aqua', 'color': '#5EC8E5'},
    'fluorescent_orange': {'name': 'Fluorescent Orange', 'color': '#FF7477'},
}

# Ink combinations, listed in print order
PRESETS = {
    'cmyk': {'name': 'CMYK (Aqua / Pink / Yellow / Black)',
             'inks': ('aqua', 'fluorescent_pink', 'yellow', 'black')},
    'duotone': {'name': 'Duotone (Pink / Blue)',
                'inks': ('fluorescent_pink', 'blue')},
    'tritone': {'name': 'Tritone (Yellow / Red / Federal Blue)',
                'inks': ('yellow', 'bright_red', 'federal_blue')},
    'mono': {'name': 'Mono (Black)',
             'inks': ('black',)},
}

DEFAULT_PRESET: str = 'cmyk'
