"""Laurier Connect campus social network backend."""
