"""
schemadoc - Structured data for the FastMCP Runner documentation.

Builds a schema.org SoftwareApplication descriptor, serializes it as JSON-LD
and publishes it into the <head> of documentation pages so crawlers can
extract machine-readable metadata about the project.
"""

__version__ = "0.1.0"
__author__ = "Drengskapur"
