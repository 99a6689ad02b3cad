"""Collaborator helpers consumed by the flagline parser and usage renderer."""
