"""findme - locate the device and show where it is."""

__version__ = "1.0.0"
