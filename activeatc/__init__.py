"""Live ATC station and traffic service for the IVAO network."""

__version__ = "0.1.0"
