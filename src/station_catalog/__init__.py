"""Station catalog: directory synchronization, enrichment and querying."""

__version__ = "0.1.0"
