from .repro import RandomSource, seeded

__all__ = ["RandomSource", "seeded"]
