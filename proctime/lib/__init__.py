"""Platform backends for reading process user time."""
