"""Language extractors."""
