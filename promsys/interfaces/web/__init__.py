"""Server-rendered page shells."""
