# Glyph ramps, ordered from sparsest to densest coverage
ASCII = " .-:=+*#%@"

# Light, medium and dark shade plus the full block (U+2591-U+2593, U+2588)
BLOCKS = " ░▒▓█"

BUILTIN_RAMPS = {
    "ascii": ASCII,
    "blocks": BLOCKS,
}
