"""Domain, ports and use cases."""
