"""I/O utilities for CSV import/export."""

from .export_csv import export_chores_csv, export_occurrences_csv
from .import_csv import import_chores_csv, import_completions_csv, import_members_csv

__all__ = [
    "import_members_csv",
    "import_chores_csv",
    "import_completions_csv",
    "export_occurrences_csv",
    "export_chores_csv",
]
