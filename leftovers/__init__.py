"""leftovers - delete cloud resources left behind by an environment."""

__version__ = "0.1.0"
