"""Role-based access control for the blog CMS."""

__version__ = "0.1.0"
