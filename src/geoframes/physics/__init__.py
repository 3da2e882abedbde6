"""Physics & astrodynamics algorithms backing the frame conversions.

Constants, small linear-algebra helpers, time scales, and the Earth orientation reductions all live
under this package. The public conversion functions are re-exported from :mod:`geoframes`.
"""
