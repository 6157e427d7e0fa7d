"""HTTP service exposing CRUD operations over a file-backed todo list."""

__version__ = "0.1.0"
