"""dkeys — suggestion ranking and grammar-correction patching for an on-screen keyboard."""

__version__ = "0.1.0"
