"""Cross-cutting concerns: configuration, logging, errors, middleware, pagination."""
