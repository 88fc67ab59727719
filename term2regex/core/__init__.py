"""Core conversion modules.

WHY: The core package holds the whole term-to-regex pipeline. Everything
outside it (CLI, HTTP service, client) only builds a Converter and calls
it.

HOW: models.py defines the configuration and span types, escaper.py and
orthography.py are the leaf transforms, classifier.py splits and
classifies spans, converter.py ties them together and assembles output.

RULES:
- No I/O in the core
- Configuration is validated once, when the Converter is built
"""
