"""HTTP fixture server for local runs of the viewer."""
