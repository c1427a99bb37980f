"""Loads user transformers inside the transform runtime.

The engine version below is filled in when this file is served, so the
runtime can refuse transformers built against an incompatible engine.
"""

import importlib

ENGINE_VERSION = "{{version:assetgraph}}"


def load_transformers(specs):
    """Import each "module:attribute" spec and return the transformer objects."""
    transformers = []
    for spec in specs:
        module_name, _, attribute = spec.partition(":")
        module = importlib.import_module(module_name)
        transformers.append(getattr(module, attribute or "transformer"))
    return transformers
