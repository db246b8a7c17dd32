"""Direct-train reachability from a single origin station."""

__version__ = "0.1.0"
