"""Mirror GitHub issues, pull requests and notifications into OmniFocus."""

__version__ = "2.5.0"
