"""Building blocks for PAR 2.0 parity archives: MD5, Galois fields, PAR1 records, paths and disk files."""

__version__ = "0.1.0"

__all__ = ["diskfile", "galois", "libpar2", "md5", "par1fileformat", "paths"]