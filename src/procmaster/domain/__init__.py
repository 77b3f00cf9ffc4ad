"""Domain layer: records, ports, plugins and the mastering core."""
