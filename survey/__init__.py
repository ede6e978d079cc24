"""Interactive terminal select prompt with answer validation and transformation."""

__version__ = "2.0.0"