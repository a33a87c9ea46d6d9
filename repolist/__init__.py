"""Build a README listing of an organization's published client libraries."""

__version__ = "0.1.0"
