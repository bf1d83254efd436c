"""Order sheet workflow: Requested -> Approved -> Ordered."""

__version__ = "0.1.0"
