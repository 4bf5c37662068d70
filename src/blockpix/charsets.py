# Dense-to-sparse ASCII ramp; luminance 0 selects the first glyph
DEFAULT_PALETTE = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\\\"^`'. "

# Short ramp for low-resolution output
SIMPLE = "@%#*+=-:. "

# Sparse-to-dense variant of the short ramp, for light backgrounds
SIMPLE_REVERSED = SIMPLE[::-1]

# Block shades: U+2588 full block down to space
SHADES = "█▓▒░ "

# Every printable ASCII character, in code point order (not a brightness ramp)
ASCII_PRINTABLE = "".join(chr(i) for i in range(32, 127))

PALETTES = {
    "default": DEFAULT_PALETTE,
    "simple": SIMPLE,
    "simple-reversed": SIMPLE_REVERSED,
    "shades": SHADES,
}
