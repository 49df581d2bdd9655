"""Wavelet tree and wavelet matrix construction with simulated workers."""

__version__ = "0.1.0"