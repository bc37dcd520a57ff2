"""
ppm-filters: read a binary PPM (P6), run an ordered chain of raster
operations over it, write the result back out as P6.
"""

__version__ = "1.0.0"
