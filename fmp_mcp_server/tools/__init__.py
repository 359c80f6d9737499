"""FMP tool catalogue and dispatcher."""
