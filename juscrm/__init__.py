"""JusCRM backend package.

Ensures the local ``juscrm`` package is treated as a regular package instead
of a namespace package.
"""
