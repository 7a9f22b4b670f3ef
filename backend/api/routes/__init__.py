"""Admin, library and health routers."""
