"""Domain layer: temporal kinds, canonical formats, zones, and errors.

Besides the standard library, only tzlocal is used (host zone lookup).
It must never import from codecs, plugins, or config.
"""
