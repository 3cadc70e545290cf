"""Process-level infrastructure: env config, app-data paths and logging policy."""
