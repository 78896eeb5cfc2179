"""CoffeeScript documentation extractor.

Turns an already-parsed CoffeeScript syntax tree into a document model
of module, class, and function docstrings, parameters, inheritance, and
``@tag`` annotations, ready for a renderer to consume.
"""

__version__ = "0.1.0"
