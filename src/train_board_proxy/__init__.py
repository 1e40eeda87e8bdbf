"""Train board proxy: live railway departure boards behind one small web service."""

__version__ = "0.1.0"
