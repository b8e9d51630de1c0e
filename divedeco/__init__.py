"""Bühlmann ZH-L16C decompression model with gradient factors, gas mixes and oxygen toxicity."""

__version__ = "6.0.2"

__all__ = ["units", "gas", "ox_tox", "config", "compartment", "deco", "model"]