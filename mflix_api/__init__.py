"""mflix-api: CRUD service over the movies, comments and theaters collections."""

__version__ = "0.1.0"
