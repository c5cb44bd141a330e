"""Game and fun logic for group chat bots: marriages, wordle, tarot, scores, sleep, and more."""

__version__ = "0.1.0"