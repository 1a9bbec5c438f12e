"""Python client for the Digital Menu API, with an offline fallback."""
