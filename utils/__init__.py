"""Shared utilities for the API layer."""
from utils.case import dict_keys_to_camel, model_to_camel

__all__ = [
    "dict_keys_to_camel",
    "model_to_camel",
]
