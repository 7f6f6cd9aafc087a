"""Text views for the command line interface."""
