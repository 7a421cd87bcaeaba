"""
webarchiver - Webpage capture to PDF through an external renderer

Converts distant webpages to PDF documents with wkhtmltopdf, under a hard
timeout, and accepts the result only after inspecting the produced PDF.

Architecture:
- Capture Context: command building, bounded execution, PDF validation
- Utils: command-line declarations, artifact allocation, logging, PDF helpers
"""

__version__ = "0.1.0"
