"""Hierarchical category paths, legacy category migration, redirects and sitemaps."""
