"""Statement builders, one module per statement kind."""
