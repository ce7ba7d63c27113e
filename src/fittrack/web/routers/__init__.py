"""Route modules for the fittrack web interface."""
