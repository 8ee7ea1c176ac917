"""HTTP interface: routers, schemas and shared dependencies."""
