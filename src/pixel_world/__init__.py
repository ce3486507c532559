"""Pixel World - sprite animation playback and tile collision geometry."""

__version__ = "0.1.0"
