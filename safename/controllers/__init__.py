"""Controllers that connect the naming service to the filesystem."""
