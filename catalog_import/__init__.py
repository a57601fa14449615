"""Multi-format product CSV importer for the storefront catalog."""

__version__ = "0.1.0"
