"""Bounded contexts of webarchiver."""
