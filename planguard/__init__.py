"""planguard - hard-rule validation for AI-generated training plans."""

__version__ = "0.1.0"
