"""AI care profile enrichment for species the app has no data for."""
