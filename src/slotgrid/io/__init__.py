"""Window-set import/export helpers."""

from .loaders import WINDOW_COLUMNS, dump_windows, load_windows, parse_windows, windows_dataframe

__all__ = ["WINDOW_COLUMNS", "dump_windows", "load_windows", "parse_windows", "windows_dataframe"]
