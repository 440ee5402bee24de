"""Cyclus — perimenopause cycle phase & fertility prediction."""

__version__ = "0.1.0"
