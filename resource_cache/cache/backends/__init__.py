"""
resource-cache — Store Backends

The Redis store is loaded lazily by Cache so a missing redis package is
reported as a ConfigurationError at construction time.
"""
