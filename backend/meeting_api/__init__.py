"""Meeting Management API: meetings, candidates and interview scheduling."""

__version__ = "1.0.0"
