"""Career Vector — explainable role recommendations from task and skill profiles."""

__version__ = "0.1.0"
