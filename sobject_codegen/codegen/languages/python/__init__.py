"""
Python code generator module.

Generates TypedDict contracts and RestObject classes from SObject describe metadata.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import PYTHON_RESERVED_WORDS, python_property_name

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    # Naming
    "PYTHON_RESERVED_WORDS",
    "python_property_name",
]
