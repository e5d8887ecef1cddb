"""Key sources and renderers for the supported display backends."""
