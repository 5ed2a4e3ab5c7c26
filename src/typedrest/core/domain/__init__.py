"""Modelos y valores del dominio.

Estructuras puras: identificadores, errores, peticiones/respuestas y
modelos base. El dominio no conoce httpx ni la CLI.
"""
