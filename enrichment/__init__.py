"""Image enrichment for wishlist items."""
