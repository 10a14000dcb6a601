"""Analytics Hub access core: role-based access control for the admin backend."""

__version__ = "0.1.0"
