"""Recipe Book: recipe management REST API, API client and web front end."""

__version__ = "0.1.0"
