"""gitcredit - attribute surviving repository content to canonical authors."""

__version__ = "0.1.0"
