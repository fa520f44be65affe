"""Core: configuración, dominio, contratos y servicios.

No imprime ni habla con la terminal; eso es trabajo de `cli`.
"""
