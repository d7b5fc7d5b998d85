"""A memcached-style key-value cache: LRU storage, protocol parser, commands and a TCP server."""

__version__ = "0.1.0"
__all__ = ["commands", "logging_config", "protocol", "server", "storage"]