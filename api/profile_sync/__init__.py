"""
Sincronizacion de perfiles entre un hub y sus sitios satelite.
"""

__version__ = "1.0.0"
