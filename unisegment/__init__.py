"""Unicode grapheme cluster and word segmentation over UTF-16 code units

The functions most applications want are in :mod:`unisegment.unicode`.
"""

__version__ = "1.0.0"
