"""
OCR line validation for scanned financial statements.

Routes each recognized line to auto-accept, quick review or manual review and
scores the document as a whole.
"""

__version__ = "1.0.0"
