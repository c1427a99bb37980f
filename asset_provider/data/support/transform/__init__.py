"""Support package loaded into the transform runtime alongside user transformers."""

from .loader import load_transformers

__all__ = ["load_transformers"]
