"""Fritz: hidden-animal deduction puzzle on a 9x9 grid."""

__version__ = "0.1.0"
