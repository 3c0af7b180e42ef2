"""Sub-routers HTTP por recurso."""
