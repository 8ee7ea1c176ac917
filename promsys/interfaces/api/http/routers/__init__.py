"""Feature routers, one module per resource."""
