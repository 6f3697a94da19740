"""Server-rendered web front end backed by the REST API."""
