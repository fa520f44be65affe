"""Servicios: orquestan adaptadores para cada procedimiento de la CLI."""
