"""Command-line interface for slotgrid."""
