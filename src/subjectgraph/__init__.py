"""subjectgraph — query engine and CLI for course prerequisite graphs."""

__version__ = "0.3.0"
