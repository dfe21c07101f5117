"""Caja DATCHÉ: ventas, precios en EUR/FCFA, stock y estadísticas."""

__version__ = "1.0.0"
