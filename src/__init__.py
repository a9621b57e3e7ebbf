"""Procuration matching back-office."""
