"""
SDK Parsing utilities.

This package decodes language model replies into typed models.
"""

from .json_response import decode_response, extract_json, strip_code_fences

__all__ = [
    "decode_response",
    "extract_json",
    "strip_code_fences",
]
