"""Boundary adapters: vector index, provider clients, metadata storage."""
