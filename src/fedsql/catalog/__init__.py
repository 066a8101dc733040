"""Catalog discovery: one flat catalog query folded into a schema tree."""
from fedsql.catalog.folder import CatalogFolder, FoldState, fold_catalog_rows
from fedsql.catalog.discoverer import discover

__all__ = ["CatalogFolder", "FoldState", "fold_catalog_rows", "discover"]
