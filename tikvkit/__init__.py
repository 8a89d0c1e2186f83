"""Keys, ranges, key codec, backoff, configuration, PD retries, region routing and an in-memory store."""

__version__ = "0.1.0"