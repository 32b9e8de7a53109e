"""Infraestrutura do cliente BoatHub."""
