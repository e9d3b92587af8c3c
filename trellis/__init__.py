"""Trellis: GraphQL schema augmentation for graph databases."""

__version__ = "0.1.0"
