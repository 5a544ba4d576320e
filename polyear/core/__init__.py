"""Internal implementation modules; import public symbols from ``polyear``."""
