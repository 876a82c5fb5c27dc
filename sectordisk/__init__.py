"""A simulated sector-based disk that stores CSV relations and answers simple queries."""

__version__ = "0.1.0"
__all__ = ["__version__"]