"""Application state and the ports the front end depends on."""
