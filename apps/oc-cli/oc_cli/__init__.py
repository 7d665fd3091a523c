"""oc CLI - scaffold and sync a monorepo from its template."""

__version__ = "0.1.0"
