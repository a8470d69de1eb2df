"""Lumi - vocabulary sets and grammar notes for the terminal."""

__version__ = "0.1.0"
