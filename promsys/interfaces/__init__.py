"""Inbound adapters: REST API and server-rendered page shells."""
