"""Model catalog package: built-in entries plus an optional YAML catalog file."""

from .catalog import CATALOG_FILE_ENV, ModelCatalog
from .loader import load_catalog_file

__all__ = ["ModelCatalog", "CATALOG_FILE_ENV", "load_catalog_file"]
