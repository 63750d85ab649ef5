"""sampler-sync - move album sides and tapes between a sampler and a song library."""

__version__ = "0.1.0"
