"""FIFO cache simulator, matrix kernels and their testbenches."""

__version__ = "0.1.0"