"""Pull-request title sheriff: Conventional-Commits title checks for CI."""

__version__ = "1.2.0"
