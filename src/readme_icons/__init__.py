"""readme-icons - skill-icon grids and badge URLs for README files."""

__version__ = "0.1.0"
