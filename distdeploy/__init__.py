"""Repackage a tool distribution into Maven artifacts and deploy them."""

__version__ = "1.0.0"
