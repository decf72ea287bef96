"""Domain types shared by the graph engine, services, and CLI."""
