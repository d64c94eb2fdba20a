"""AppMeta — In-memory keyword search over application metadata documents."""

__version__ = "0.1.0"
