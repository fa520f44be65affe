"""Adaptadores de infraestructura.

Por qué un paquete:
- Agrupa todo lo que toca procesos externos (ldd, docker) o el disco en
  formatos concretos (JSON).
- El Core depende de los contratos en `core.interfaces`, no de estos módulos.
"""
