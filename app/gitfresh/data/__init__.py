"""Bundled data files for git-fresh."""
