"""Open Finance accounts API: consent-gated, paginated account listing."""

__version__ = "0.1.0"
