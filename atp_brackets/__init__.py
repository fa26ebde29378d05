"""ATP match data pipeline: normalized JSON entities and reconstructed draws."""

__version__ = "0.1.0"
