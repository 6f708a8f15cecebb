"""docpress — markdown documentation trees to JSON content artifacts."""

__version__ = "0.1.0"
