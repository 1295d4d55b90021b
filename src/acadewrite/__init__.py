"""AcadeWrite: AI-assisted academic writing editor."""

__version__ = "0.1.0"
