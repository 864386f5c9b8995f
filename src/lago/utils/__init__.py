"""Configuration and file utilities."""

from .config import ANCHOR_KEY, ANCHOR_VARIANCE, LagoParams, parse_args
from .io import load_g2o, save_g2o

__all__ = [
    "ANCHOR_KEY",
    "ANCHOR_VARIANCE",
    "LagoParams",
    "load_g2o",
    "parse_args",
    "save_g2o",
]
