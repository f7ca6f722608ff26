"""Full Stock storefront: catalog browsing, a single cart and checkout over a JSON document."""

__version__ = "1.0.0"
