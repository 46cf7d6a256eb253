"""
Domain layer package.

Pure business objects and contracts. No framework imports and no IO.
"""
