"""Plot Browser - catalog of land plots for ecological restoration projects."""

__version__ = "0.1.0"
