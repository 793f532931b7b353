"""Command-line interface for gf-shopify."""
