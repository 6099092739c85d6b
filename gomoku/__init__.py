"""Five-in-a-row engine: bitboards, threat evaluation and alpha-beta search"""

__version__ = "0.1.0"
