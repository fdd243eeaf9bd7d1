"""Encoding, hashing, commitment and signing primitives."""
