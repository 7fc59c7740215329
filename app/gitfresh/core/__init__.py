"""Core reset protocol, configuration and errors for git-fresh."""
