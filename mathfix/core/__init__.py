"""
Core building blocks: scaled arithmetic, expression evaluation, formatting,
numeral conversion and the configuration cascade.

Nothing here holds process-wide state; the global configuration layer is
created by the top-level mathfix package.
"""
