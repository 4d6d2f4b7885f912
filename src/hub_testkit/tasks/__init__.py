"""
Hub TestKit tasks package.

Task modules are imported directly by the main __init__.py using Collection.from_module().
"""
