"""
Shape configuration - which measurement fields exist for each stone outline,
where they are read from in the export, and how they are rounded.

Configuration is data: profiles live in registry.SHAPE_LIBRARY, variant
detectors in registry.SHAPE_VARIANTS.
"""
