"""Wa-tor predator-prey simulations, sequential and threaded, and a Mandelbrot renderer."""

__version__ = "0.1.0"