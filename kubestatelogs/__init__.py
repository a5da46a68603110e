"""Structured state records built from Kubernetes objects held in an object store."""

__version__ = "0.1.0"