"""Parse, check, fix and track Internet-Drafts and RFC documents."""

__version__ = "0.1.0"