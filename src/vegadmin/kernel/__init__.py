"""Kernel – framework-agnostic primitives shared by every layer."""
