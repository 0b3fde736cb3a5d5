"""memoscope - deterministic narrative analysis and scoring for investment memos."""

__version__ = "0.4.0"
