"""
TypeScript code generator module.

Generates ts-force RestObject classes from SObject describe metadata.
"""

from .generator import TypeScriptGenerator, create_typescript_generator

__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
]
