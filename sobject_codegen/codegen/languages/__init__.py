"""
Language-specific code generators.

This module contains generators for different target languages.
"""

from .typescript import TypeScriptGenerator, create_typescript_generator
from .python import PythonGenerator, create_python_generator

__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
    "PythonGenerator",
    "create_python_generator",
]
